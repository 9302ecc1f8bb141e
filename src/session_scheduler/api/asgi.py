"""ASGI entrypoint for the session scheduler API."""

from session_scheduler.api.app import create_app
from session_scheduler.containers import build_container

app = create_app(build_container())
