"""ASGI entrypoint for the souvenir map API."""

from souvenir_map.api.app import create_app
from souvenir_map.containers import build_container

app = create_app(build_container())
