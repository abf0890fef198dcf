"""ASGI entrypoint for the studio booking API."""

from studio_booking.api.app import create_app
from studio_booking.containers import build_container

app = create_app(build_container())
