"""Registration Wizard — program/course rules and step layout for the public forms.

Invariants:
    - Program labels map 1:1 to course program types (residential | hybrid | online)
    - Course selection is required only for Residential and Hybrid programs,
      and only when that program currently offers at least one course
    - A submitted course_id must belong to the chosen program
    - The student application has exactly two steps: DETAILS then PAYMENT;
      next/previous never leave that range
    - Payment step cannot be submitted without a screenshot

Design Decisions:
    - Pure functions over Course lists: callers fetch courses, this module decides
      visibility and validity (no IO, trivially testable)
    - Field visibility returned as data (WizardStep/WizardField) so any client can
      render the same conditional form
"""

from dataclasses import dataclass, field
from enum import IntEnum

from seminary_site.core.errors import FormValidationError
from seminary_site.schemas.content import Course

PROGRAM_TYPE_BY_LABEL = {
    "Residential": "residential",
    "Center for Hybrid Education": "hybrid",
    "Center for Online Education": "online",
}
COURSE_REQUIRED_LABELS = frozenset({"Residential", "Center for Hybrid Education"})

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
SELECT_COURSE_MESSAGE = "Please select a course"
COURSE_NOT_IN_PROGRAM_MESSAGE = "The selected course is not offered in this program"
SCREENSHOT_REQUIRED_MESSAGE = "Please upload a screenshot of your payment confirmation"


class ApplicationStep(IntEnum):
    DETAILS = 1
    PAYMENT = 2


@dataclass(frozen=True)
class WizardField:
    name: str
    required: bool = False
    visible: bool = True
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class WizardStep:
    step: ApplicationStep
    title: str
    fields: list[WizardField] = field(default_factory=list)


def program_type_for(label: str | None) -> str | None:
    return PROGRAM_TYPE_BY_LABEL.get(label or "")


def courses_for_program(label: str | None, courses: list[Course]) -> list[Course]:
    """Courses offered by the program behind a public label (empty if unknown)."""
    program_type = program_type_for(label)
    if program_type is None:
        return []
    return [c for c in courses if c.program_type == program_type]


def course_required(label: str | None, courses: list[Course]) -> bool:
    return label in COURSE_REQUIRED_LABELS and bool(courses_for_program(label, courses))


def check_course_selection(
    label: str | None, course_id: str | None, courses: list[Course],
) -> None:
    """Raise FormValidationError if the course choice breaks the program rules."""
    offered = courses_for_program(label, courses)
    if not course_id:
        if course_required(label, courses):
            raise FormValidationError(SELECT_COURSE_MESSAGE, "course_id")
        return
    if all(c.id != course_id for c in offered):
        raise FormValidationError(COURSE_NOT_IN_PROGRAM_MESSAGE, "course_id")


def check_payment_step(has_screenshot: bool) -> None:
    if not has_screenshot:
        raise FormValidationError(SCREENSHOT_REQUIRED_MESSAGE, "payment_screenshot")


def next_step(step: ApplicationStep) -> ApplicationStep:
    return ApplicationStep(min(step + 1, ApplicationStep.PAYMENT))


def previous_step(step: ApplicationStep) -> ApplicationStep:
    return ApplicationStep(max(step - 1, ApplicationStep.DETAILS))


def describe_application(
    label: str | None, courses: list[Course], has_payment_info: bool,
) -> list[WizardStep]:
    """Step layout with conditional course field for the chosen program."""
    offered = courses_for_program(label, courses)
    details = WizardStep(ApplicationStep.DETAILS, "Personal Information", [
        WizardField("name", required=True),
        WizardField("email", required=True),
        WizardField("phone"),
        WizardField("address"),
        WizardField("city"),
        WizardField("state"),
        WizardField("date_of_birth"),
        WizardField("gender"),
        WizardField("education_level", options=(
            "High School", "Bachelor's Degree", "Master's Degree", "Doctorate", "Other",
        )),
        WizardField("previous_institution"),
        WizardField(
            "program_interest", required=True,
            options=tuple(PROGRAM_TYPE_BY_LABEL),
        ),
        WizardField(
            "course_id",
            required=course_required(label, courses),
            visible=bool(offered),
            options=tuple(c.id for c in offered),
        ),
        WizardField("start_date"),
        WizardField("comments"),
    ])
    payment = WizardStep(ApplicationStep.PAYMENT, "Payment Information", [
        WizardField("donation_info", visible=has_payment_info),
        WizardField("payment_screenshot", required=True),
    ])
    return [details, payment]
