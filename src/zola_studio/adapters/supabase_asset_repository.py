"""Supabase-backed asset repositories (table rows plus storage objects)."""

import base64
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from supabase import Client

from zola_studio.domain.assets import CollectionAsset, GeneratedAsset, Persisted


@dataclass
class _SupabaseAssetStore:
    """Shared storage/table plumbing for asset repositories."""

    client: Client
    table: str
    bucket: str
    signed_url_ttl_seconds: int = 3600

    def _select_rows(self, owner_id: str) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return list(response.data or [])

    def _upload(self, owner_id: str, payload: str) -> str:
        path = f"{owner_id}/{uuid4()}.png"
        self.client.storage.from_(self.bucket).upload(
            path, base64.b64decode(payload), {"content-type": "image/png"}
        )
        return path

    def _insert_row(self, row: dict[str, object]) -> dict[str, object]:
        response = self.client.table(self.table).insert(row).execute()
        if not response.data:
            raise RuntimeError(f"Failed to insert asset into {self.table}")
        return response.data[0]

    def _display_url(self, storage_ref: str) -> str:
        signed = self.client.storage.from_(self.bucket).create_signed_url(
            storage_ref, self.signed_url_ttl_seconds
        )
        url = signed.get("signedURL") or signed.get("signedUrl")
        if not url:
            raise RuntimeError(f"Failed to sign storage object {storage_ref}")
        return str(url)

    def delete(self, asset_id: str, storage_ref: str) -> None:
        """Remove the stored object, then the table row."""
        self.client.storage.from_(self.bucket).remove([storage_ref])
        self.client.table(self.table).delete().eq("id", asset_id).execute()


@dataclass
class SupabaseGeneratedAssetRepository(_SupabaseAssetStore):
    """Supabase implementation for generated photoshoot images."""

    table: str = "generated_assets"
    bucket: str = "generated-assets"

    def list_by_owner(self, owner_id: str) -> list[GeneratedAsset]:
        """Return the owner's generated images, newest first."""
        return [self._to_asset(row) for row in self._select_rows(owner_id)]

    def create(
        self, owner_id: str, payload: str, metadata: dict[str, str]
    ) -> GeneratedAsset:
        """Upload the image and insert its row."""
        path = self._upload(owner_id, payload)
        row = self._insert_row(
            {
                "user_id": owner_id,
                "image_url": path,
                "source_feature": metadata.get("source_feature", "virtual_photoshoot"),
            }
        )
        return self._to_asset(row)

    def _to_asset(self, row: dict[str, object]) -> GeneratedAsset:
        image_url = str(row["image_url"])
        return GeneratedAsset(
            key=Persisted(str(row["id"])),
            user_id=str(row["user_id"]),
            image_url=image_url,
            display_url=self._display_url(image_url),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            source_feature=str(row.get("source_feature") or "virtual_photoshoot"),
        )


@dataclass
class SupabaseCollectionAssetRepository(_SupabaseAssetStore):
    """Supabase implementation for the asset collection."""

    table: str = "asset_collection"
    bucket: str = "asset-collection"

    def list_by_owner(self, owner_id: str) -> list[CollectionAsset]:
        """Return the owner's collection items, newest first."""
        return [self._to_asset(row) for row in self._select_rows(owner_id)]

    def create(
        self, owner_id: str, payload: str, metadata: dict[str, str]
    ) -> CollectionAsset:
        """Upload the item image and insert its row."""
        path = self._upload(owner_id, payload)
        row = self._insert_row(
            {
                "user_id": owner_id,
                "image_url": path,
                "asset_type": metadata.get("asset_type", "individual"),
                "item_name": metadata.get("item_name", ""),
                "item_category": metadata.get("item_category", ""),
            }
        )
        return self._to_asset(row)

    def _to_asset(self, row: dict[str, object]) -> CollectionAsset:
        image_url = str(row["image_url"])
        return CollectionAsset(
            key=Persisted(str(row["id"])),
            user_id=str(row["user_id"]),
            image_url=image_url,
            display_url=self._display_url(image_url),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            asset_type=str(row.get("asset_type") or "individual"),
            item_name=str(row.get("item_name") or ""),
            item_category=str(row.get("item_category") or ""),
        )
