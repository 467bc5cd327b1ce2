"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from zola_studio.api.assets import router as assets_router
from zola_studio.api.auth import router as auth_router
from zola_studio.app_logging import configure_logging
from zola_studio.containers import AppContainer
from zola_studio.domain.errors import AuthorizationError, ValidationError

SSR_OUTLET = "<!--ssr-outlet-->"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    client_dist = Path(container.settings.client_dist_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            await state_container.session_projector.start()
        except Exception:
            logger.exception("Failed to start session projection")
        yield
        state_container.session_projector.stop()
        await state_container.session_projector.wait_idle()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(GZipMiddleware)

    @app.exception_handler(AuthorizationError)
    async def authorization_error(
        request: Request, exc: AuthorizationError
    ) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(auth_router)
    app.include_router(assets_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    if (client_dist / "assets").is_dir():
        app.mount(
            "/assets", StaticFiles(directory=client_dist / "assets"), name="assets"
        )

    @app.get("/{full_path:path}", include_in_schema=False)
    async def render_page(request: Request, full_path: str) -> HTMLResponse:
        """Render a page into the client HTML template."""
        state_container: AppContainer = request.app.state.container
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        try:
            template = (client_dist / "index.html").read_text(encoding="utf-8")
            state_container.router.visit(url)
            app_html = await state_container.render(url)
            html = template.replace(SSR_OUTLET, app_html)
        except Exception as exc:
            logger.exception("SSR error", extra={"url": url})
            return PlainTextResponse(str(exc), status_code=500)
        return HTMLResponse(html)

    return app
