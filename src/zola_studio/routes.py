"""Route table for the studio pages."""

from dataclasses import dataclass


class Paths:
    """Known page paths."""

    LANDING = "/"
    AUTH = "/auth"
    HOME = "/dashboard"
    VIRTUAL_PHOTOSHOOT = "/virtual-photoshoot"
    STYLE_SCENE = "/style-scene"
    ASSET_GENERATOR = "/asset-generator"
    CATALOG_FORGED = "/catalog-forged"
    GALLERY = "/gallery"
    ASSET_COLLECTION = "/asset-collection"
    PRICING = "/pricing"
    SETTINGS = "/settings"
    ABOUT = "/about"
    MODEL_GALLERY = "/model-gallery"
    BACKGROUND_GALLERY = "/background-gallery"


PUBLIC_PATHS = frozenset({Paths.LANDING, Paths.AUTH})

_AUTHENTICATED_VIEWS = {
    Paths.HOME: "home",
    Paths.VIRTUAL_PHOTOSHOOT: "virtual_photoshoot",
    Paths.STYLE_SCENE: "style_scene",
    Paths.ASSET_GENERATOR: "asset_generator",
    Paths.CATALOG_FORGED: "catalog_forged",
    Paths.GALLERY: "gallery",
    Paths.ASSET_COLLECTION: "asset_collection",
    Paths.PRICING: "about",
    Paths.SETTINGS: "about",
    Paths.ABOUT: "about",
    Paths.MODEL_GALLERY: "model_gallery",
    Paths.BACKGROUND_GALLERY: "background_gallery",
}

_AUTHENTICATED_REDIRECTS = {"/home": Paths.HOME}

_ANONYMOUS_VIEWS = {
    Paths.AUTH: "auth",
    Paths.LANDING: "landing",
}


@dataclass(frozen=True)
class RouteMatch:
    """Outcome of resolving a path."""

    view: str | None
    redirect_to: str | None = None


def is_public(path: str) -> bool:
    """Return True for pages reachable without signing in."""
    return path in PUBLIC_PATHS


def resolve_route(path: str, authenticated: bool) -> RouteMatch:
    """Map a path to a view or a redirect for the current auth state."""
    path = normalize_path(path)
    if authenticated:
        if path in _AUTHENTICATED_REDIRECTS:
            return RouteMatch(view=None, redirect_to=_AUTHENTICATED_REDIRECTS[path])
        return RouteMatch(view=_AUTHENTICATED_VIEWS.get(path, "not_found"))
    if path in _ANONYMOUS_VIEWS:
        return RouteMatch(view=_ANONYMOUS_VIEWS[path])
    return RouteMatch(view=None, redirect_to=Paths.LANDING)


def normalize_path(url: str) -> str:
    """Strip query, fragment and trailing slash from a URL path."""
    path = url.split("?", 1)[0].split("#", 1)[0] or "/"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path
