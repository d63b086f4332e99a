"""ASGI entrypoint for the HealthLover API."""

from health_lover.api.app import create_app
from health_lover.containers import build_container

app = create_app(build_container())
