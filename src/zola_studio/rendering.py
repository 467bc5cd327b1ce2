"""Server-side page rendering."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from html import escape

from zola_studio.domain.assets import Asset
from zola_studio.routes import resolve_route
from zola_studio.services.state import AppState

RenderFunction = Callable[[str], Awaitable[str]]

_TITLES = {
    "landing": "ZOLA AI",
    "auth": "Sign in",
    "home": "Dashboard",
    "virtual_photoshoot": "Virtual Photoshoot",
    "style_scene": "Style Scene",
    "asset_generator": "Asset Generator",
    "catalog_forged": "Catalog Forged",
    "gallery": "Gallery",
    "asset_collection": "Asset Collection",
    "about": "About",
    "model_gallery": "Model Gallery",
    "background_gallery": "Background Gallery",
    "not_found": "Page not found",
}


@dataclass
class PageRenderer:
    """Renders the markup for a URL from the current workspace state."""

    state: AppState

    async def render(self, url: str) -> str:
        """Return the HTML fragment for the app outlet."""
        if self.state.loading:
            return '<div class="spinner" role="status"></div>'
        match = resolve_route(url, authenticated=self.state.current_user is not None)
        if match.redirect_to is not None:
            target = escape(match.redirect_to)
            return f'<meta http-equiv="refresh" content="0; url={target}" />'
        view = match.view or "not_found"
        parts = [f'<main data-view="{view}">', f"<h1>{_TITLES[view]}</h1>"]
        if view == "gallery":
            gallery = self.state.gallery
            parts.append(_render_assets(gallery.assets, gallery.error))
        elif view == "asset_collection":
            collection = self.state.collection
            parts.append(_render_assets(collection.assets, collection.error))
        parts.append("</main>")
        return "".join(parts)


def _render_assets(assets: list[Asset], error: str | None) -> str:
    items = [
        f'<li data-id="{escape(asset.id)}" '
        f'data-pending="{"true" if asset.is_pending else "false"}">'
        f'<img src="{escape(asset.display_url)}" alt="" /></li>'
        for asset in assets
    ]
    error_html = f'<p class="error">{escape(error)}</p>' if error else ""
    return f'{error_html}<ul class="assets">{"".join(items)}</ul>'
