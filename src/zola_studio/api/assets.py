"""Gallery and asset collection endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from zola_studio.api.models import (
    AssetListView,
    AssetView,
    SaveCollectionAssetRequest,
    SaveGeneratedAssetRequest,
)

if TYPE_CHECKING:
    from zola_studio.containers import AppContainer
    from zola_studio.services.reconciler import OptimisticAssetList

router = APIRouter(prefix="/api", tags=["assets"])


async def require_user(request: Request) -> None:
    """Ensure a user is signed in."""
    container: AppContainer = request.app.state.container
    container.state.require_user()


@router.get("/gallery", dependencies=[Depends(require_user)])
async def list_gallery(request: Request) -> AssetListView:
    """Return the cached gallery."""
    container: AppContainer = request.app.state.container
    return _list_view(container.state.gallery)


@router.post("/gallery", status_code=status.HTTP_202_ACCEPTED)
async def save_to_gallery(
    payload: SaveGeneratedAssetRequest, request: Request
) -> AssetView:
    """Add a generated image; the returned entry is still pending."""
    container: AppContainer = request.app.state.container
    pending = container.state.gallery.save(
        _current_owner(container),
        payload.image_url,
        {"source_feature": payload.source_feature},
    )
    return AssetView.from_asset(pending)


@router.post("/gallery/refresh")
async def refresh_gallery(request: Request) -> AssetListView:
    """Reload the gallery from the remote store."""
    container: AppContainer = request.app.state.container
    await container.state.gallery.refresh(container.state.owner_id, force=True)
    return _list_view(container.state.gallery)


@router.delete("/gallery/{asset_id}", dependencies=[Depends(require_user)])
async def delete_from_gallery(asset_id: str, request: Request) -> AssetListView:
    """Delete a gallery image, rolling back on failure."""
    container: AppContainer = request.app.state.container
    return await _delete(container.state.gallery, asset_id)


@router.get("/collection", dependencies=[Depends(require_user)])
async def list_collection(request: Request) -> AssetListView:
    """Return the cached asset collection."""
    container: AppContainer = request.app.state.container
    return _list_view(container.state.collection)


@router.post("/collection", status_code=status.HTTP_202_ACCEPTED)
async def save_to_collection(
    payload: SaveCollectionAssetRequest, request: Request
) -> AssetView:
    """Add a catalog item; the returned entry is still pending."""
    container: AppContainer = request.app.state.container
    pending = container.state.collection.save(
        _current_owner(container),
        payload.image_url,
        {
            "asset_type": payload.asset_type,
            "item_name": payload.item_name,
            "item_category": payload.item_category,
        },
    )
    return AssetView.from_asset(pending)


@router.post("/collection/refresh")
async def refresh_collection(request: Request) -> AssetListView:
    """Reload the asset collection from the remote store."""
    container: AppContainer = request.app.state.container
    await container.state.collection.refresh(container.state.owner_id, force=True)
    return _list_view(container.state.collection)


@router.delete("/collection/{asset_id}", dependencies=[Depends(require_user)])
async def delete_from_collection(asset_id: str, request: Request) -> AssetListView:
    """Delete a collection item, rolling back on failure."""
    container: AppContainer = request.app.state.container
    return await _delete(container.state.collection, asset_id)


def _current_owner(container: AppContainer) -> str | None:
    user = container.state.current_user
    return user.id if user else None


async def _delete(assets: OptimisticAssetList, asset_id: str) -> AssetListView:
    asset = assets.find(asset_id)
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    if asset.is_pending:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The asset is still being saved.",
        )
    if not await assets.delete(asset):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another delete is already in progress.",
        )
    return _list_view(assets)


def _list_view(assets: OptimisticAssetList) -> AssetListView:
    return AssetListView(
        assets=[AssetView.from_asset(asset) for asset in assets.assets],
        is_loading=assets.is_loading,
        error=assets.error,
        deleting_id=assets.deleting_id,
    )
