"""ASGI entrypoint for the studio API."""

from zola_studio.api.app import create_app
from zola_studio.containers import build_container

app = create_app(build_container())
