"""Record schemas — row parsing and form input rules."""

import pytest
from pydantic import ValidationError

from seminary_site.core.errors import RecordValidationError
from seminary_site.schemas.content import Course
from seminary_site.schemas.parsing import parse_row, parse_rows
from seminary_site.schemas.people import AlumniProfileWrite
from seminary_site.schemas.registration import RegistrationCreate


def test_parse_rows_validates_each_row():
    rows = [{"id": "c1", "title": "Theology", "program_type": "residential"}]
    [course] = parse_rows(Course, rows, "courses")
    assert course.title == "Theology"
    assert course.description == ""


def test_parse_rows_none_is_empty():
    assert parse_rows(Course, None, "courses") == []


def test_malformed_row_names_table_and_field():
    with pytest.raises(RecordValidationError) as exc:
        parse_rows(Course, [{"id": "c1", "title": "X", "program_type": "evening"}], "courses")
    assert exc.value.context.resource == "courses"
    assert "0.program_type" in exc.value.message


def test_parse_row_missing_id():
    with pytest.raises(RecordValidationError):
        parse_row(Course, {"title": "X", "program_type": "online"}, "courses")


def test_registration_strips_name_and_blanks_course():
    form = RegistrationCreate(
        name="  Ann  ", email="ann@example.com",
        program_interest="Residential", course_id="",
    )
    assert form.name == "Ann"
    assert form.course_id is None


def test_registration_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        RegistrationCreate(name="   ", email="a@b.io", program_interest="Residential")


def test_registration_rejects_unknown_program():
    with pytest.raises(ValidationError):
        RegistrationCreate(name="Ann", email="a@b.io", program_interest="Evening")


@pytest.mark.parametrize("year,ok", [(1899, False), (1900, True), (2100, True), (2101, False)])
def test_alumni_graduation_year_bounds(year, ok):
    fields = {"name": "Carla", "graduation_year": year, "degree": "MDiv"}
    if ok:
        assert AlumniProfileWrite(**fields).graduation_year == year
    else:
        with pytest.raises(ValidationError):
            AlumniProfileWrite(**fields)
