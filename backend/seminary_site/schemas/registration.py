"""Registration Schemas — interest registrations and student applications.

Invariants:
    - name and email are required and stripped; email must look like an address
    - program_interest is one of the three public program labels
    - course_id is optional at the schema level; the per-program rule lives in
      core/registration_wizard.py because it depends on which courses exist

Design Decisions:
    - Email checked with a pattern instead of EmailStr: no extra dependency,
      the admissions team verifies addresses by contacting applicants anyway
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from seminary_site.schemas.content import Record

ProgramLabel = Literal[
    "Residential",
    "Center for Hybrid Education",
    "Center for Online Education",
]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Registration(Record):
    """Row of the `registrations` table (program interest form)."""
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    program_interest: str | None = None
    course_id: str | None = None
    comments: str | None = None
    contacted: bool = False


class RegistrationView(Registration):
    """Registration with its course title resolved for the admin list."""
    course_title: str = "Not specified"


class _ContactFields(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    phone: str = Field("", max_length=30)
    address: str = Field("", max_length=500)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=100)
    program_interest: ProgramLabel
    course_id: str | None = None
    comments: str = Field("", max_length=5000)

    @field_validator("name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("course_id")
    @classmethod
    def blank_course_is_none(cls, v: str | None) -> str | None:
        return v or None


class RegistrationCreate(_ContactFields):
    """Public program-interest form submission."""


class StudentApplication(Record):
    """Row of the `student_registrations` table (two-step application)."""
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    education_level: str | None = None
    previous_institution: str | None = None
    program_interest: str | None = None
    course_id: str | None = None
    start_date: str | None = None
    comments: str | None = None
    payment_screenshot_url: str | None = None


EducationLevel = Literal[
    "High School", "Bachelor's Degree", "Master's Degree", "Doctorate", "Other",
]


class StudentApplicationCreate(_ContactFields):
    """Step 1 fields of the student application (step 2 is the payment upload)."""
    date_of_birth: date | None = None
    gender: str = Field("", max_length=30)
    education_level: EducationLevel | None = None
    previous_institution: str = Field("", max_length=300)
    start_date: str = Field("", max_length=50)


class ContactedUpdate(BaseModel):
    contacted: bool
