"""Registration Service — public form submissions (interest, application, alumni).

Invariants:
    - Course rules are checked against the courses the backend currently offers
    - A student application is inserted only after its payment screenshot uploaded
    - Screenshots go to the payment bucket under payment-screenshots/{uuid}.{ext}
    - Alumni image uploads happen before the profile insert/update; the stored
      image_url is the public URL of the uploaded object
"""

import logging
from dataclasses import dataclass

from seminary_site.config import Settings
from seminary_site.core.errors import ResourceNotFoundError
from seminary_site.core.registration_wizard import (
    WizardStep,
    check_course_selection,
    check_payment_step,
    describe_application,
)
from seminary_site.infrastructure.backend_client import HostedBackendClient
from seminary_site.infrastructure.storage import new_object_path
from seminary_site.schemas.content import Course, DonationInfo
from seminary_site.schemas.parsing import parse_rows
from seminary_site.schemas.people import AlumniProfile, AlumniProfileWrite
from seminary_site.schemas.registration import (
    Registration,
    RegistrationCreate,
    StudentApplication,
    StudentApplicationCreate,
)

logger = logging.getLogger(__name__)

PAYMENT_FOLDER = "payment-screenshots"
ALUMNI_FOLDER = "alumni"


@dataclass(frozen=True)
class UploadedFile:
    """An in-memory file received from a multipart form."""
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


class RegistrationService:
    def __init__(self, backend: HostedBackendClient, settings: Settings):
        self.backend = backend
        self.settings = settings

    async def offered_courses(self) -> list[Course]:
        rows = await (
            self.backend.table("courses")
            .select("id,title,program_type")
            .order("title", True)
            .execute()
        )
        return parse_rows(Course, rows, "courses")

    async def submit_registration(self, form: RegistrationCreate) -> Registration:
        """Record a program-interest registration."""
        courses = await self.offered_courses()
        check_course_selection(form.program_interest, form.course_id, courses)
        rows = await self.backend.table("registrations").insert(
            form.model_dump(mode="json"),
        ).execute()
        registration = parse_rows(Registration, rows, "registrations")[0]
        logger.info(
            f"Registration received for {form.program_interest}",
            extra={"table": "registrations"},
        )
        return registration

    async def application_form(self, program_interest: str | None) -> tuple[list[WizardStep], DonationInfo | None]:
        """Step layout for the chosen program plus the payment details to show."""
        courses = await self.offered_courses()
        rows = await (
            self.backend.table("donation_info").select()
            .order("created_at", False).limit(1).execute()
        )
        donation = parse_rows(DonationInfo, rows, "donation_info")
        info = donation[0] if donation else None
        return describe_application(program_interest, courses, info is not None), info

    async def submit_application(
        self, form: StudentApplicationCreate, screenshot: UploadedFile | None,
    ) -> StudentApplication:
        """Validate both steps, upload the payment screenshot, insert the application."""
        courses = await self.offered_courses()
        check_course_selection(form.program_interest, form.course_id, courses)
        check_payment_step(screenshot is not None and bool(screenshot.data))

        bucket = self.backend.storage.bucket(self.settings.payment_bucket)
        upload = bucket.upload(
            new_object_path(PAYMENT_FOLDER, screenshot.filename),
            screenshot.data,
            screenshot.content_type,
        )
        screenshot_url = await upload.result()

        row = form.model_dump(mode="json")
        row["payment_screenshot_url"] = screenshot_url
        rows = await self.backend.table("student_registrations").insert(row).execute()
        logger.info(
            f"Student application received for {form.program_interest}",
            extra={"table": "student_registrations"},
        )
        return parse_rows(StudentApplication, rows, "student_registrations")[0]

    # -- Alumni ----------------------------------------------------------------

    async def register_alumni(
        self, form: AlumniProfileWrite, image: UploadedFile | None = None,
    ) -> AlumniProfile:
        row = await self._alumni_row(form, image)
        rows = await self.backend.table("alumni_profiles").insert(row).execute()
        return parse_rows(AlumniProfile, rows, "alumni_profiles")[0]

    async def search_alumni(self, term: str) -> list[AlumniProfile]:
        """Profiles whose name contains term (case-insensitive); empty term finds none."""
        term = term.strip()
        if not term:
            return []
        rows = await (
            self.backend.table("alumni_profiles").select()
            .ilike("name", f"*{term}*")
            .order("name", True)
            .execute()
        )
        return parse_rows(AlumniProfile, rows, "alumni_profiles")

    async def update_alumni(
        self, profile_id: str, form: AlumniProfileWrite, image: UploadedFile | None = None,
    ) -> AlumniProfile:
        row = await self._alumni_row(form, image)
        rows = await (
            self.backend.table("alumni_profiles").update(row)
            .eq("id", profile_id).execute()
        )
        profiles = parse_rows(AlumniProfile, rows, "alumni_profiles")
        if not profiles:
            raise ResourceNotFoundError("Alumni profile", profile_id)
        return profiles[0]

    async def _alumni_row(self, form: AlumniProfileWrite, image: UploadedFile | None) -> dict:
        row = form.model_dump(mode="json")
        if image is not None and image.data:
            bucket = self.backend.storage.bucket(self.settings.alumni_bucket)
            upload = bucket.upload(
                new_object_path(ALUMNI_FOLDER, image.filename),
                image.data,
                image.content_type,
            )
            row["image_url"] = await upload.result()
        return row
