"""ASGI entrypoint for the Suno gateway API."""

from suno_gateway.api.app import create_app
from suno_gateway.app_logging import configure_logging
from suno_gateway.containers import build_container

configure_logging()
app = create_app(build_container())
