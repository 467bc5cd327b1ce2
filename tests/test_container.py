"""Tests for container wiring."""

import asyncio

from zola_studio.containers import build_container
from zola_studio.services.reconciler import CollectionAssetList, GalleryAssetList


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.session_projector.state is container.state
    assert isinstance(container.state.gallery, GalleryAssetList)
    assert isinstance(container.state.collection, CollectionAssetList)
    assert container.state.tour.delay_seconds == settings.tour_delay_seconds
    assert container.auth_service.site_url == settings.site_url
    asyncio.run(container.close_resources())
