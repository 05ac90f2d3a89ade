"""
pytest configuration and fixtures.

The database used by the fallback application is pointed at a temporary
SQLite file before any urlshort module reads its settings.
"""

import os
import tempfile
from pathlib import Path

_DB_DIR = tempfile.mkdtemp(prefix="urlshort-tests-")
DB_FILE = Path(_DB_DIR) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_FILE}"

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from starlette.responses import PlainTextResponse  # noqa: E402
from starlette.testclient import TestClient  # noqa: E402

from urlshort.core.rate_limit import limiter  # noqa: E402
from urlshort.db import models  # noqa: E402,F401


class RecordingFallback:
    """ASGI app answering 404 and remembering every scope it was given."""

    def __init__(self):
        self.scopes = []

    async def __call__(self, scope, receive, send):
        self.scopes.append(scope)
        if scope["type"] != "http":
            return
        response = PlainTextResponse(
            f"fallback: {scope['path']}",
            status_code=404,
            headers={"X-Fallback": "yes"}
        )
        await response(scope, receive, send)

    @property
    def paths(self):
        return [scope["path"] for scope in self.scopes if scope["type"] == "http"]


@pytest.fixture
def fallback() -> RecordingFallback:
    """Fallback handler that records delegated requests."""
    return RecordingFallback()


@pytest.fixture
def client_for():
    """Build a TestClient for an ASGI app."""
    def _client(app) -> TestClient:
        return TestClient(app)
    return _client


@pytest.fixture
def lifespan_call():
    """Send a lifespan scope straight to an ASGI app."""
    async def _call(app):
        async def receive():
            return {"type": "lifespan.startup"}

        async def send(message):
            pass

        await app({"type": "lifespan"}, receive, send)
    return _call


@pytest.fixture
def database():
    """Fresh redirects schema in the test database."""
    engine = create_engine(f"sqlite:///{DB_FILE}")
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    engine.dispose()
    limiter.reset()
    yield DB_FILE


@pytest.fixture
def redirect_yaml() -> bytes:
    """Sample YAML redirect document."""
    return (
        b"- path: /some-path\n"
        b"  url: https://www.some-url.com/demo\n"
        b"- path: /dup\n"
        b"  url: https://a.example\n"
        b"- path: /dup\n"
        b"  url: https://b.example\n"
    )
