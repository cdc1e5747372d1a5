"""API test fixtures — FastAPI app wired to the fake hosted backend.

Invariants:
    - app.state.backend is replaced by a client on FakeBackend's transport
    - Lifespan is not run (ASGITransport), so no real backend client is built
    - admin_headers carry the token the fake backend accepts
"""

import pytest
from httpx import ASGITransport, AsyncClient

from seminary_site.main import app

from tests.fake_backend import ADMIN_TOKEN


@pytest.fixture
async def client(backend):
    """FastAPI test client with the backend client overridden."""
    app.state.backend = backend
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
