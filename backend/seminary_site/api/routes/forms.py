"""Public Forms — program interest, student application and alumni self-service.

Invariants:
    - Form fields are validated by the same Pydantic models the service layer uses
    - Multipart fields that fail validation answer 400 like JSON bodies do
    - The student application is a single multipart POST carrying both wizard steps
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from seminary_site.api.dependencies import get_registration_service
from seminary_site.core.registration_wizard import SELECT_COURSE_MESSAGE
from seminary_site.schemas.people import AlumniProfile, AlumniProfileWrite
from seminary_site.schemas.registration import (
    Registration,
    RegistrationCreate,
    StudentApplication,
    StudentApplicationCreate,
)
from seminary_site.services.registration_service import RegistrationService, UploadedFile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/forms", tags=["forms"])


def _parse_form(model: type[BaseModel], fields: dict) -> BaseModel:
    """Validate multipart fields; blank optional fields are treated as missing."""
    data = {k: v for k, v in fields.items() if v not in (None, "")}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


async def _read_upload(upload: UploadFile | None) -> UploadedFile | None:
    if upload is None or not upload.filename:
        return None
    return UploadedFile(
        filename=upload.filename,
        data=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


# -- Program interest ----------------------------------------------------------

@router.post(
    "/registrations", response_model=Registration,
    status_code=status.HTTP_201_CREATED,
)
async def submit_registration(
    body: RegistrationCreate,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.submit_registration(body)


# -- Student application -------------------------------------------------------

@router.get("/application")
async def application_form(
    program: str | None = Query(None),
    service: RegistrationService = Depends(get_registration_service),
):
    """Wizard layout for the chosen program and the payment details to display."""
    steps, donation = await service.application_form(program)
    return {
        "steps": steps,
        "donation_info": donation,
        "messages": {"select_course": SELECT_COURSE_MESSAGE},
    }


@router.post(
    "/application", response_model=StudentApplication,
    status_code=status.HTTP_201_CREATED,
)
async def submit_application(
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    date_of_birth: str = Form(""),
    gender: str = Form(""),
    education_level: str = Form(""),
    previous_institution: str = Form(""),
    program_interest: str = Form(""),
    course_id: str = Form(""),
    start_date: str = Form(""),
    comments: str = Form(""),
    payment_screenshot: UploadFile | None = File(None),
    service: RegistrationService = Depends(get_registration_service),
):
    form = _parse_form(StudentApplicationCreate, {
        "name": name, "email": email, "phone": phone, "address": address,
        "city": city, "state": state, "date_of_birth": date_of_birth,
        "gender": gender, "education_level": education_level,
        "previous_institution": previous_institution,
        "program_interest": program_interest, "course_id": course_id,
        "start_date": start_date, "comments": comments,
    })
    screenshot = await _read_upload(payment_screenshot)
    return await service.submit_application(form, screenshot)


# -- Alumni --------------------------------------------------------------------

def _alumni_fields(
    name: str = Form(""),
    graduation_year: str = Form(""),
    degree: str = Form(""),
    current_position: str = Form(""),
    organization: str = Form(""),
    location: str = Form(""),
    image_url: str = Form(""),
    bio: str = Form(""),
    testimonial: str = Form(""),
) -> AlumniProfileWrite:
    return _parse_form(AlumniProfileWrite, {
        "name": name, "graduation_year": graduation_year, "degree": degree,
        "current_position": current_position, "organization": organization,
        "location": location, "image_url": image_url, "bio": bio,
        "testimonial": testimonial,
    })


@router.post(
    "/alumni", response_model=AlumniProfile,
    status_code=status.HTTP_201_CREATED,
)
async def register_alumni(
    form: AlumniProfileWrite = Depends(_alumni_fields),
    image: UploadFile | None = File(None),
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.register_alumni(form, await _read_upload(image))


@router.get("/alumni/search", response_model=list[AlumniProfile])
async def search_alumni(
    q: str = Query("", max_length=200),
    service: RegistrationService = Depends(get_registration_service),
):
    """Find an existing profile by name before editing it."""
    return await service.search_alumni(q)


@router.put("/alumni/{profile_id}", response_model=AlumniProfile)
async def update_alumni(
    profile_id: str,
    form: AlumniProfileWrite = Depends(_alumni_fields),
    image: UploadFile | None = File(None),
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.update_alumni(profile_id, form, await _read_upload(image))
