"""Listing Filters — tests for alumni/course/registration filtering and CSV export."""

import csv
import io
from datetime import date

from seminary_site.core.listing_filters import (
    alumni_facets,
    attach_course_titles,
    filter_alumni,
    filter_courses,
    filter_registrations,
    group_courses,
    program_interests,
    registrations_csv,
    registrations_csv_filename,
)
from seminary_site.schemas.content import Course
from seminary_site.schemas.people import AlumniProfile
from seminary_site.schemas.registration import Registration

ALUMNI = [
    AlumniProfile(id="1", name="Samuel Johnson", graduation_year=2010,
                  degree="Doctor of Ministry", organization="Grace Church", location="Atlanta"),
    AlumniProfile(id="2", name="Sarah Williams", graduation_year=2015,
                  degree="Master of Divinity", organization="Global Missions", location="Nairobi"),
    AlumniProfile(id="3", name="James Wilson", graduation_year=2015,
                  degree="Master of Divinity", organization="New Life", location="Portland"),
]

COURSES = [
    Course(id="c1", title="Bachelor of Theology", description="Biblical studies",
           program_type="residential"),
    Course(id="c2", title="Online Certificate", description="Foundations",
           program_type="online"),
]

REGISTRATIONS = [
    Registration(id="g1", name="Ann Lee", email="ann@example.com", city="Austin",
                 program_interest="Residential", course_id="c1", contacted=True),
    Registration(id="g2", name="Bob Stone", email="bob@example.com", phone="555-0101",
                 program_interest="Center for Online Education", course_id=None),
    Registration(id="g3", name="Cara, Jr.", email="cara@example.com",
                 program_interest="Residential", course_id="missing",
                 comments='Said "call me"'),
]


# ─── Alumni ──────────────────────────────────────────────────────

def test_filter_alumni_search_matches_name_org_location():
    assert [a.id for a in filter_alumni(ALUMNI, "sarah")] == ["2"]
    assert [a.id for a in filter_alumni(ALUMNI, "GRACE")] == ["1"]
    assert [a.id for a in filter_alumni(ALUMNI, "portland")] == ["3"]


def test_filter_alumni_year_and_degree():
    assert [a.id for a in filter_alumni(ALUMNI, graduation_year=2015)] == ["2", "3"]
    assert [a.id for a in filter_alumni(ALUMNI, degree="Doctor of Ministry")] == ["1"]
    assert filter_alumni(ALUMNI, "james", graduation_year=2010) == []


def test_filter_alumni_empty_search_keeps_all():
    assert filter_alumni(ALUMNI) == ALUMNI


def test_alumni_facets_sorted_and_distinct():
    years, degrees = alumni_facets(ALUMNI)
    assert years == [2015, 2010]
    assert degrees == ["Doctor of Ministry", "Master of Divinity"]


# ─── Courses ─────────────────────────────────────────────────────

def test_filter_courses_by_search_and_program():
    assert [c.id for c in filter_courses(COURSES, "biblical")] == ["c1"]
    assert [c.id for c in filter_courses(COURSES, program_type="online")] == ["c2"]


def test_group_courses_always_has_three_programs():
    grouped = group_courses(COURSES)
    assert set(grouped) == {"residential", "hybrid", "online"}
    assert grouped["hybrid"] == []
    assert [c.id for c in grouped["residential"]] == ["c1"]


# ─── Registrations ───────────────────────────────────────────────

def test_attach_course_titles_defaults_to_not_specified():
    views = attach_course_titles(REGISTRATIONS, COURSES)
    assert [v.course_title for v in views] == [
        "Bachelor of Theology", "Not specified", "Not specified",
    ]


def test_filter_registrations_combines_filters():
    views = attach_course_titles(REGISTRATIONS, COURSES)
    assert [r.id for r in filter_registrations(views, program_interest="Residential")] == ["g1", "g3"]
    assert [r.id for r in filter_registrations(views, contacted=False)] == ["g2", "g3"]
    assert [r.id for r in filter_registrations(views, "555")] == ["g2"]
    assert [r.id for r in filter_registrations(views, course_id="c1", contacted=True)] == ["g1"]


def test_program_interests_distinct_sorted():
    assert program_interests(REGISTRATIONS) == [
        "Center for Online Education", "Residential",
    ]


def test_registrations_csv_quotes_and_booleans():
    views = attach_course_titles(REGISTRATIONS, COURSES)
    rows = list(csv.DictReader(io.StringIO(registrations_csv(views))))
    assert len(rows) == 3
    assert rows[0]["contacted"] == "true"
    assert rows[1]["contacted"] == "false"
    assert rows[1]["course_id"] == ""
    assert rows[2]["name"] == "Cara, Jr."
    assert rows[2]["comments"] == 'Said "call me"'
    assert rows[0]["course_title"] == "Bachelor of Theology"


def test_registrations_csv_filename():
    assert registrations_csv_filename(date(2025, 3, 9)) == "registrations_2025-03-09.csv"
