"""Optimistic save/delete for the user's asset lists."""

import asyncio
import itertools
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Coroutine
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, Protocol, TypeVar

from zola_studio.domain.assets import (
    NOT_PERSISTED,
    Asset,
    CollectionAsset,
    GeneratedAsset,
    Pending,
)
from zola_studio.domain.errors import AuthorizationError, RemoteWriteError

logger = logging.getLogger(__name__)

DELETE_ERROR_MESSAGE = "Could not delete the asset. Please try again."

AssetT = TypeVar("AssetT", bound=Asset)

_sequence = itertools.count()


class AssetRepository(Protocol[AssetT]):
    """Persistence interface for one asset collection."""

    def list_by_owner(self, owner_id: str) -> list[AssetT]:
        """Return the owner's assets, most recent first."""

    def create(self, owner_id: str, payload: str, metadata: dict[str, str]) -> AssetT:
        """Persist a base64 image payload and return the stored asset."""

    def delete(self, asset_id: str, storage_ref: str) -> None:
        """Delete an asset row and its stored object."""


@dataclass(frozen=True)
class Reconciled(Generic[AssetT]):
    """Remote write confirmed; swap the placeholder for the real asset."""

    placeholder: Pending
    asset: AssetT


@dataclass(frozen=True)
class RolledBack:
    """Remote write failed; drop the placeholder."""

    placeholder: Pending


def placeholder_id(prefix: str) -> str:
    """Build a placeholder id from the current time and a process sequence."""
    return f"{prefix}{int(time.time() * 1000)}_{next(_sequence)}"


def extract_payload(data_url: str) -> str:
    """Return the base64 body of a data URL."""
    _, separator, payload = data_url.partition(",")
    if not separator or not payload:
        raise ValueError("Display content is not a base64 data URL")
    return payload


@dataclass
class OptimisticAssetList(ABC, Generic[AssetT]):
    """In-memory asset list that reflects writes before the remote confirms them.

    The list is owned by the event loop. Background writes never touch it
    directly; they post a ``Reconciled`` or ``RolledBack`` message that is
    applied as a single list assignment.
    """

    repository: AssetRepository[AssetT]
    placeholder_prefix: str = "temp_"
    load_error_message: str = "Could not load your assets. Please try again later."
    assets: list[AssetT] = field(default_factory=list)
    is_loading: bool = False
    error: str | None = None
    deleting_id: str | None = None
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, repr=False)
    _epoch: int = field(default=0, repr=False)

    def snapshot(self) -> list[AssetT]:
        """Return a copy of the current list."""
        return list(self.assets)

    def find(self, asset_id: str) -> AssetT | None:
        """Return the entry with the given id, if present."""
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    def clear(self) -> None:
        """Drop every entry and reset flags."""
        self._epoch += 1
        self.assets = []
        self.error = None

    def save(
        self, owner_id: str | None, display_content: str, metadata: dict[str, str]
    ) -> AssetT:
        """Show the asset immediately and persist it in the background."""
        if not owner_id:
            logger.error("Cannot save asset without a logged in user")
            raise AuthorizationError("You must be logged in to save an image.")

        placeholder = Pending(placeholder_id(self.placeholder_prefix))
        pending = self._pending_asset(placeholder, owner_id, display_content, metadata)
        self.assets = [pending, *self.assets]
        self._spawn(self._persist(placeholder, owner_id, display_content, metadata))
        return pending

    async def delete(self, asset: AssetT) -> bool:
        """Remove an asset optimistically.

        Returns False without touching the list when another delete is in
        flight or when the asset is still waiting for its save to land.
        """
        match asset.key:
            case Pending():
                return False
        if self.deleting_id:
            return False

        original = list(self.assets)
        self.assets = [entry for entry in self.assets if entry.id != asset.id]
        self.deleting_id = asset.id
        try:
            await asyncio.to_thread(self.repository.delete, asset.id, asset.image_url)
        except Exception:
            logger.exception("Failed to delete asset", extra={"asset_id": asset.id})
            self.assets = original
            self.error = DELETE_ERROR_MESSAGE
        finally:
            self.deleting_id = None
        return True

    async def refresh(self, owner_id: str | None, force: bool = False) -> None:
        """Reload from the remote store when empty or when forced."""
        if not owner_id or (self.assets and not force):
            return

        epoch = self._epoch
        self.is_loading = True
        self.error = None
        try:
            assets = await asyncio.to_thread(self.repository.list_by_owner, owner_id)
        except Exception:
            logger.exception("Failed to fetch assets", extra={"owner_id": owner_id})
            if epoch == self._epoch:
                self.error = self.load_error_message
        else:
            if epoch == self._epoch:
                self.assets = assets
        finally:
            self.is_loading = False

    def schedule_refresh(self, owner_id: str | None, force: bool = False) -> None:
        """Run ``refresh`` as a detached task."""
        self._spawn(self.refresh(owner_id, force=force))

    async def wait_idle(self) -> None:
        """Wait until every background task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def apply(self, message: Reconciled[AssetT] | RolledBack) -> None:
        """Apply a completion message from a background write."""
        match message:
            case Reconciled(placeholder=placeholder, asset=asset):
                self.assets = [
                    asset if entry.key == placeholder else entry
                    for entry in self.assets
                ]
            case RolledBack(placeholder=placeholder):
                self.assets = [
                    entry for entry in self.assets if entry.key != placeholder
                ]

    async def _persist(
        self,
        placeholder: Pending,
        owner_id: str,
        display_content: str,
        metadata: dict[str, str],
    ) -> None:
        try:
            payload = extract_payload(display_content)
            try:
                asset = await asyncio.to_thread(
                    self.repository.create, owner_id, payload, metadata
                )
            except Exception as exc:
                raise RemoteWriteError(str(exc)) from exc
        except Exception:
            logger.exception(
                "Failed to save asset in background",
                extra={"placeholder_id": placeholder.placeholder_id},
            )
            self.apply(RolledBack(placeholder))
            return
        self.apply(Reconciled(placeholder, asset))

    def _spawn(self, coro: Coroutine[object, object, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @abstractmethod
    def _pending_asset(
        self,
        placeholder: Pending,
        owner_id: str,
        display_content: str,
        metadata: dict[str, str],
    ) -> AssetT:
        """Build the placeholder entry shown while the save is in flight."""


@dataclass
class GalleryAssetList(OptimisticAssetList[GeneratedAsset]):
    """Generated photoshoot images."""

    placeholder_prefix: str = "temp_"
    load_error_message: str = "Could not load your gallery. Please try again later."

    def _pending_asset(
        self,
        placeholder: Pending,
        owner_id: str,
        display_content: str,
        metadata: dict[str, str],
    ) -> GeneratedAsset:
        return GeneratedAsset(
            key=placeholder,
            user_id=owner_id,
            image_url=NOT_PERSISTED,
            display_url=display_content,
            created_at=datetime.now(tz=UTC),
            source_feature=metadata.get("source_feature", "virtual_photoshoot"),
        )


@dataclass
class CollectionAssetList(OptimisticAssetList[CollectionAsset]):
    """Catalog items saved to the asset collection."""

    placeholder_prefix: str = "temp_collection_"
    load_error_message: str = (
        "Could not load your asset collection. Please try again later."
    )

    def _pending_asset(
        self,
        placeholder: Pending,
        owner_id: str,
        display_content: str,
        metadata: dict[str, str],
    ) -> CollectionAsset:
        return CollectionAsset(
            key=placeholder,
            user_id=owner_id,
            image_url=NOT_PERSISTED,
            display_url=display_content,
            created_at=datetime.now(tz=UTC),
            asset_type=metadata.get("asset_type", "individual"),
            item_name=metadata.get("item_name", ""),
            item_category=metadata.get("item_category", ""),
        )
