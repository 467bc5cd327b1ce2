"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from zola_studio.adapters.json_flag_store import JsonFileFlagStore
from zola_studio.adapters.supabase_asset_repository import (
    SupabaseCollectionAssetRepository,
    SupabaseGeneratedAssetRepository,
)
from zola_studio.adapters.supabase_identity_provider import SupabaseIdentityProvider
from zola_studio.adapters.supabase_profile_repository import SupabaseProfileRepository
from zola_studio.config import Settings
from zola_studio.rendering import PageRenderer, RenderFunction
from zola_studio.services.auth import AuthService
from zola_studio.services.navigation import Router
from zola_studio.services.onboarding import OnboardingTour
from zola_studio.services.reconciler import CollectionAssetList, GalleryAssetList
from zola_studio.services.session_projector import SessionProjector
from zola_studio.services.state import AppState


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state: AppState
    router: Router
    auth_service: AuthService
    session_projector: SessionProjector
    render: RenderFunction
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    identity = SupabaseIdentityProvider(supabase_client)
    gallery = GalleryAssetList(
        SupabaseGeneratedAssetRepository(
            supabase_client,
            table=resolved_settings.generated_assets_table,
            bucket=resolved_settings.generated_assets_bucket,
            signed_url_ttl_seconds=resolved_settings.signed_url_ttl_seconds,
        )
    )
    collection = CollectionAssetList(
        SupabaseCollectionAssetRepository(
            supabase_client,
            table=resolved_settings.collection_assets_table,
            bucket=resolved_settings.collection_assets_bucket,
            signed_url_ttl_seconds=resolved_settings.signed_url_ttl_seconds,
        )
    )
    tour = OnboardingTour(
        JsonFileFlagStore(Path(resolved_settings.flag_store_path)),
        delay_seconds=resolved_settings.tour_delay_seconds,
    )
    state = AppState(gallery=gallery, collection=collection, tour=tour)
    router = Router()
    session_projector = SessionProjector(
        identity=identity,
        profiles=SupabaseProfileRepository(supabase_client),
        state=state,
        router=router,
    )

    async def close_resources() -> None:
        await gallery.wait_idle()
        await collection.wait_idle()

    return AppContainer(
        settings=resolved_settings,
        state=state,
        router=router,
        auth_service=AuthService(identity, site_url=resolved_settings.site_url),
        session_projector=session_projector,
        render=PageRenderer(state).render,
        close_resources=close_resources,
    )
