"""Root conftest — shared test configuration and hosted backend fixtures.

Invariants:
    - Tests never reach a real hosted backend: every client uses FakeBackend's transport
    - Retry delays are recorded by a fake sleep instead of waited on
"""

import os

# Ensure tests never talk to a real hosted backend
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("BACKEND_ANON_KEY", "anon-test-key")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from seminary_site.infrastructure.backend_client import HostedBackendClient  # noqa: E402

from tests.fake_backend import BASE_URL, FakeBackend  # noqa: E402


class FakeSleep:
    """Records requested delays; returns immediately."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
async def backend(fake_backend, fake_sleep):
    client = HostedBackendClient(
        BASE_URL, "anon-test-key",
        transport=fake_backend.transport(),
        sleep=fake_sleep,
        upload_chunk_size=4,
    )
    yield client
    await client.aclose()
