"""ASGI entrypoint serving the fasting tracker HTTP API.

The container is built from environment settings at import time, so the
storage backend is chosen by ``STORAGE_BACKEND`` when the server starts.
"""

from fasting_tracker.api.app import create_app
from fasting_tracker.containers import build_container

app = create_app(build_container())
