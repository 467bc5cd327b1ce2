"""Request and response models for the JSON API."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from zola_studio.domain.assets import Asset, CollectionAsset, GeneratedAsset
from zola_studio.domain.users import User


class LoginRequest(BaseModel):
    """Email/password sign-in form."""

    email: str = ""
    password: str = ""


class SignupRequest(LoginRequest):
    """Registration form."""

    username: str = ""


class OAuthRequest(BaseModel):
    """OAuth sign-in request."""

    provider: str = "google"


class SaveGeneratedAssetRequest(BaseModel):
    """Generated image to add to the gallery."""

    image_url: str
    source_feature: str = "virtual_photoshoot"


class SaveCollectionAssetRequest(BaseModel):
    """Catalog item to add to the asset collection."""

    image_url: str
    asset_type: Literal["individual", "composed"]
    item_name: str
    item_category: str


class AssetView(BaseModel):
    """Serialized asset."""

    id: str
    pending: bool
    user_id: str
    image_url: str
    display_url: str
    created_at: datetime
    source_feature: str | None = None
    asset_type: str | None = None
    item_name: str | None = None
    item_category: str | None = None

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetView":
        """Build a view from a domain asset."""
        view = cls(
            id=asset.id,
            pending=asset.is_pending,
            user_id=asset.user_id,
            image_url=asset.image_url,
            display_url=asset.display_url,
            created_at=asset.created_at,
        )
        if isinstance(asset, GeneratedAsset):
            view.source_feature = asset.source_feature
        if isinstance(asset, CollectionAsset):
            view.asset_type = asset.asset_type
            view.item_name = asset.item_name
            view.item_category = asset.item_category
        return view


class AssetListView(BaseModel):
    """Serialized asset list with its status flags."""

    assets: list[AssetView]
    is_loading: bool
    error: str | None
    deleting_id: str | None


class UserView(BaseModel):
    """Serialized user projection."""

    id: str
    email: str
    username: str
    avatar: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        """Build a view from the domain user."""
        return cls(
            id=user.id, email=user.email, username=user.username, avatar=user.avatar
        )


class SessionView(BaseModel):
    """Current workspace session."""

    user: UserView | None
    location: str
    loading: bool
    tour_active: bool
