"""Admin Service — update rules and delete cleanup."""

import logging

import pytest

from seminary_site.config import Settings
from seminary_site.core.errors import ResourceNotFoundError
from seminary_site.schemas.content import BannerWrite
from seminary_site.services.admin_service import AdminService
from seminary_site.services.resources import build_resources

from tests.fake_backend import ADMIN_TOKEN, BASE_URL


@pytest.fixture
def admin(backend):
    settings = Settings(backend_url=BASE_URL, backend_anon_key="anon-test-key")
    return AdminService(backend, ADMIN_TOKEN, build_resources(settings))


async def test_update_keeps_banner_position(admin, fake_backend):
    [row] = fake_backend.seed("banners", {"title": "A", "image_url": "https://img/a.jpg", "order_index": 3})
    payload = BannerWrite(title="Renamed", image_url="https://img/a.jpg", order_index=None)
    banner = await admin.update("banners", row["id"], payload)
    assert banner.title == "Renamed"
    assert banner.order_index == 3


async def test_update_unknown_id_is_not_found(admin):
    payload = BannerWrite(title="A", image_url="https://img/a.jpg")
    with pytest.raises(ResourceNotFoundError):
        await admin.update("banners", "missing", payload)


async def test_delete_succeeds_when_file_cleanup_fails(admin, fake_backend, caplog):
    [row] = fake_backend.seed("teachers", {
        "name": "Dr. Grace",
        "image_url": f"{BASE_URL}/storage/v1/object/public/teacher-images/teachers/t.jpg",
    })
    fake_backend.fail_storage = (403, {"error": "Unauthorized", "message": "new row violates row-level security policy"})

    with caplog.at_level(logging.WARNING):
        await admin.delete("teachers", row["id"])

    assert fake_backend.tables["teachers"] == []
    assert "Stored files left behind" in caplog.text
