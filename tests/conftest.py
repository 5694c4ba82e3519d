import os

# must be set before book_catalog.app builds its settings at import time
os.environ.setdefault("APP_DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_OTEL_ENABLED", "false")

import pytest


@pytest.fixture
def anyio_backend():
    return "asyncio"
