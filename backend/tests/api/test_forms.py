"""Public Forms — interest registration, student application and alumni self-service.

Invariants:
    - Residential/Hybrid registrations need a course of that program when one exists
    - The application is stored only with an uploaded payment screenshot
    - Invalid form fields answer 400 with field details
"""

from seminary_site.core.registration_wizard import (
    SCREENSHOT_REQUIRED_MESSAGE,
    SELECT_COURSE_MESSAGE,
)

from tests.fake_backend import BASE_URL


def _seed_courses(fake_backend):
    residential, online = fake_backend.seed(
        "courses",
        {"title": "Bachelor of Theology", "program_type": "residential"},
        {"title": "Online Certificate", "program_type": "online"},
    )
    return residential, online


def _registration(**overrides):
    body = {
        "name": "  Ann Lee ",
        "email": "ann@example.com",
        "phone": "555-0101",
        "program_interest": "Residential",
    }
    body.update(overrides)
    return body


# ─── Program interest ────────────────────────────────────────────

async def test_registration_stored(client, fake_backend):
    residential, _ = _seed_courses(fake_backend)
    response = await client.post(
        "/api/v1/forms/registrations", json=_registration(course_id=residential["id"]),
    )
    assert response.status_code == 201
    [stored] = fake_backend.tables["registrations"]
    assert stored["name"] == "Ann Lee"
    assert stored["course_id"] == residential["id"]
    assert response.json()["contacted"] is False


async def test_residential_registration_requires_course(client, fake_backend):
    _seed_courses(fake_backend)
    response = await client.post("/api/v1/forms/registrations", json=_registration())
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["message"] == SELECT_COURSE_MESSAGE
    assert error["field"] == "course_id"
    assert fake_backend.tables["registrations"] == []


async def test_online_registration_without_course(client, fake_backend):
    _seed_courses(fake_backend)
    response = await client.post(
        "/api/v1/forms/registrations",
        json=_registration(program_interest="Center for Online Education", course_id=""),
    )
    assert response.status_code == 201
    assert fake_backend.tables["registrations"][0]["course_id"] is None


async def test_registration_course_from_other_program_rejected(client, fake_backend):
    _, online = _seed_courses(fake_backend)
    response = await client.post(
        "/api/v1/forms/registrations", json=_registration(course_id=online["id"]),
    )
    assert response.status_code == 400


async def test_registration_invalid_email(client):
    response = await client.post(
        "/api/v1/forms/registrations", json=_registration(email="not-an-email"),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_registration_backend_outage_is_503(client, fake_backend):
    fake_backend.down = True
    response = await client.post("/api/v1/forms/registrations", json=_registration())
    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "BACKEND_UNAVAILABLE"
    assert error["display_message"].startswith("Network connection error")


# ─── Student application ─────────────────────────────────────────

def _application_fields(course_id: str):
    return {
        "name": "Ben Cole",
        "email": "ben@example.com",
        "date_of_birth": "2001-05-04",
        "education_level": "High School",
        "program_interest": "Residential",
        "course_id": course_id,
    }


async def test_application_form_layout(client, fake_backend):
    _seed_courses(fake_backend)
    fake_backend.seed("donation_info", {"title": "Fees", "account_number": "123"})
    body = (await client.get("/api/v1/forms/application", params={"program": "Residential"})).json()
    details, payment = body["steps"]
    course = next(f for f in details["fields"] if f["name"] == "course_id")
    assert course["required"] is True
    assert payment["step"] == 2
    assert body["donation_info"]["account_number"] == "123"


async def test_application_with_screenshot(client, fake_backend):
    residential, _ = _seed_courses(fake_backend)
    response = await client.post(
        "/api/v1/forms/application",
        data=_application_fields(residential["id"]),
        files={"payment_screenshot": ("receipt.png", b"\x89PNG-bytes", "image/png")},
    )
    assert response.status_code == 201
    [stored] = fake_backend.tables["student_registrations"]
    assert stored["date_of_birth"] == "2001-05-04"
    prefix = f"{BASE_URL}/storage/v1/object/public/payment-screenshots/payment-screenshots/"
    assert stored["payment_screenshot_url"].startswith(prefix)
    assert stored["payment_screenshot_url"].endswith(".png")
    [path] = fake_backend.objects["payment-screenshots"]
    assert fake_backend.objects["payment-screenshots"][path] == b"\x89PNG-bytes"


async def test_application_without_screenshot_rejected(client, fake_backend):
    residential, _ = _seed_courses(fake_backend)
    response = await client.post(
        "/api/v1/forms/application", data=_application_fields(residential["id"]),
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == SCREENSHOT_REQUIRED_MESSAGE
    assert fake_backend.tables["student_registrations"] == []


async def test_application_missing_name_is_validation_error(client, fake_backend):
    residential, _ = _seed_courses(fake_backend)
    fields = _application_fields(residential["id"])
    fields["name"] = ""
    response = await client.post(
        "/api/v1/forms/application",
        data=fields,
        files={"payment_screenshot": ("receipt.png", b"png", "image/png")},
    )
    assert response.status_code == 400
    details = response.json()["error"]["details"]
    assert any(d["field"] == "name" for d in details)


# ─── Alumni ──────────────────────────────────────────────────────

_ALUMNI_FIELDS = {
    "name": "Carla Diaz",
    "graduation_year": "2017",
    "degree": "Master of Divinity",
    "organization": "Hope Church",
}


async def test_register_alumni_with_image(client, fake_backend):
    response = await client.post(
        "/api/v1/forms/alumni",
        data=_ALUMNI_FIELDS,
        files={"image": ("me.jpg", b"jpeg", "image/jpeg")},
    )
    assert response.status_code == 201
    profile = response.json()
    assert profile["graduation_year"] == 2017
    assert "/alumni-images/alumni/" in profile["image_url"]


async def test_register_alumni_invalid_year(client):
    response = await client.post(
        "/api/v1/forms/alumni", data={**_ALUMNI_FIELDS, "graduation_year": "1850"},
    )
    assert response.status_code == 400


async def test_search_and_update_alumni(client, fake_backend):
    [row] = fake_backend.seed(
        "alumni_profiles",
        {"name": "Carla Diaz", "graduation_year": 2017, "degree": "Master of Divinity"},
    )
    found = (await client.get("/api/v1/forms/alumni/search", params={"q": "carla"})).json()
    assert [p["id"] for p in found] == [row["id"]]

    empty = (await client.get("/api/v1/forms/alumni/search", params={"q": "  "})).json()
    assert empty == []

    response = await client.put(
        f"/api/v1/forms/alumni/{row['id']}",
        data={**_ALUMNI_FIELDS, "organization": "Grace Church"},
    )
    assert response.status_code == 200
    assert fake_backend.tables["alumni_profiles"][0]["organization"] == "Grace Church"


async def test_update_unknown_alumni_is_404(client):
    response = await client.put("/api/v1/forms/alumni/missing", data=_ALUMNI_FIELDS)
    assert response.status_code == 404
