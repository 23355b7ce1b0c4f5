"""ASGI entrypoint for the IronLog API."""

from ironlog.api.app import create_app
from ironlog.containers import build_container

app = create_app(build_container())
