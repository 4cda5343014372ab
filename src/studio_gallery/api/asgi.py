"""ASGI entrypoint for the studio gallery API."""

from studio_gallery.api.app import create_app
from studio_gallery.containers import build_container

app = create_app(build_container())
