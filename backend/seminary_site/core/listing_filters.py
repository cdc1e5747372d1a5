"""Listing Filters — in-memory search/filter for alumni, courses and registrations.

Invariants:
    - All filters are pure: inputs are never mutated, order is preserved
    - Search is case-insensitive substring match; empty search matches everything
    - A filter value of None means "no filter on this field"
    - CSV export quotes values containing commas, quotes or newlines

Design Decisions:
    - Filtering in Python rather than PostgREST: lists are small (hundreds of rows)
      and the admin UI re-filters the same rows many times
"""

import csv
import io
from datetime import date

from seminary_site.schemas.content import Course
from seminary_site.schemas.people import AlumniProfile
from seminary_site.schemas.registration import Registration, RegistrationView

NOT_SPECIFIED = "Not specified"


def _matches(term: str, *values: str | None) -> bool:
    if not term:
        return True
    term = term.lower()
    return any(v and term in v.lower() for v in values)


# --- Alumni -------------------------------------------------------------------

def filter_alumni(
    alumni: list[AlumniProfile],
    search: str = "",
    graduation_year: int | None = None,
    degree: str | None = None,
) -> list[AlumniProfile]:
    return [
        a for a in alumni
        if _matches(search, a.name, a.organization, a.location)
        and (graduation_year is None or a.graduation_year == graduation_year)
        and (not degree or a.degree == degree)
    ]


def alumni_facets(alumni: list[AlumniProfile]) -> tuple[list[int], list[str]]:
    """Distinct graduation years (newest first) and degrees (alphabetical)."""
    years = sorted({a.graduation_year for a in alumni}, reverse=True)
    degrees = sorted({a.degree for a in alumni if a.degree})
    return years, degrees


# --- Courses ------------------------------------------------------------------

def filter_courses(
    courses: list[Course], search: str = "", program_type: str | None = None,
) -> list[Course]:
    return [
        c for c in courses
        if _matches(search, c.title, c.description)
        and (not program_type or c.program_type == program_type)
    ]


def group_courses(courses: list[Course]) -> dict[str, list[Course]]:
    grouped: dict[str, list[Course]] = {"residential": [], "hybrid": [], "online": []}
    for course in courses:
        grouped.setdefault(course.program_type, []).append(course)
    return grouped


# --- Registrations ------------------------------------------------------------

def attach_course_titles(
    registrations: list[Registration], courses: list[Course],
) -> list[RegistrationView]:
    titles = {c.id: c.title for c in courses}
    return [
        RegistrationView(
            **r.model_dump(),
            course_title=titles.get(r.course_id or "", NOT_SPECIFIED),
        )
        for r in registrations
    ]


def filter_registrations(
    registrations: list[RegistrationView],
    search: str = "",
    program_interest: str | None = None,
    course_id: str | None = None,
    contacted: bool | None = None,
) -> list[RegistrationView]:
    return [
        r for r in registrations
        if _matches(search, r.name, r.email, r.phone, r.city, r.state)
        and (not program_interest or r.program_interest == program_interest)
        and (not course_id or r.course_id == course_id)
        and (contacted is None or r.contacted == contacted)
    ]


def program_interests(registrations: list[Registration]) -> list[str]:
    return sorted({r.program_interest for r in registrations if r.program_interest})


def registrations_csv(registrations: list[RegistrationView]) -> str:
    columns = list(RegistrationView.model_fields)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(columns)
    for reg in registrations:
        row = reg.model_dump(mode="json")
        writer.writerow([_csv_cell(row.get(col)) for col in columns])
    return buffer.getvalue()


def _csv_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def registrations_csv_filename(today: date | None = None) -> str:
    return f"registrations_{(today or date.today()).isoformat()}.csv"
