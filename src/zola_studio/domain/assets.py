"""Domain models for saved assets."""

from dataclasses import dataclass
from datetime import datetime

NOT_PERSISTED = "optimistic_update.png"


@dataclass(frozen=True)
class Pending:
    """Key of an asset that has not been confirmed by the remote store."""

    placeholder_id: str


@dataclass(frozen=True)
class Persisted:
    """Key of an asset confirmed by the remote store."""

    asset_id: str


AssetKey = Pending | Persisted


@dataclass(frozen=True)
class Asset:
    """Common shape of gallery and collection assets."""

    key: AssetKey
    user_id: str
    image_url: str
    display_url: str
    created_at: datetime

    @property
    def id(self) -> str:
        """Return the identifier, placeholder or real."""
        match self.key:
            case Pending(placeholder_id=placeholder_id):
                return placeholder_id
            case Persisted(asset_id=asset_id):
                return asset_id

    @property
    def is_pending(self) -> bool:
        """Return True while the asset awaits remote confirmation."""
        return isinstance(self.key, Pending)


@dataclass(frozen=True)
class GeneratedAsset(Asset):
    """An image produced by one of the generation features."""

    source_feature: str


@dataclass(frozen=True)
class CollectionAsset(Asset):
    """A catalog item saved to the user's asset collection."""

    asset_type: str
    item_name: str
    item_category: str
