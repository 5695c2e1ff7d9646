"""ASGI entrypoint for the NutriGenius API."""

from nutrigenius.api.app import create_app
from nutrigenius.containers import build_container

app = create_app(build_container())
