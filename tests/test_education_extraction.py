"""Tests for education parsing."""

from resume_inference.core.education_parser import (
    extract_education,
    find_degree,
    find_institution,
    graduation_date,
    parse_education_lines,
)


def test_degree_then_institution():
    text = """Jane Smith

EDUCATION
Bachelor of Science in Computer Science, 2016
University of Texas at Austin

SKILLS
Python
"""
    entries = extract_education(text)
    assert len(entries) == 1
    edu = entries[0]
    assert edu.degree == "Bachelor of Science"
    assert edu.field == "Computer Science"
    assert edu.institution == "University of Texas at Austin"
    assert edu.graduation_date == "2016-05"
    assert edu.order == 0


def test_institution_location_from_same_line():
    entries = parse_education_lines([
        "M.S. in Data Science | 2020",
        "Stanford University, Stanford, CA",
    ])
    assert entries[0].institution == "Stanford University"
    assert entries[0].location == "Stanford, CA"
    assert entries[0].degree == "M.S."


def test_institution_above_degree():
    entries = parse_education_lines([
        "Massachusetts Institute of Technology",
        "PhD in Physics, May 2019",
    ])
    assert entries[0].institution == "Massachusetts Institute of Technology"
    assert entries[0].degree == "PhD"
    assert entries[0].graduation_date == "2019-05"


def test_degree_without_institution_is_skipped():
    assert parse_education_lines(["Bachelor of Arts in History, 2012", "Graduated with honors"]) == []


def test_details_become_description():
    entries = parse_education_lines([
        "Bachelor of Arts in Economics",
        "Columbia University",
        "GPA 3.8, Dean's List",
    ])
    assert entries[0].description == "GPA 3.8, Dean's List"
    assert entries[0].graduation_date is None


def test_two_entries_in_order():
    entries = parse_education_lines([
        "Master's in Computer Science, 2020",
        "Georgia Institute of Technology",
        "Bachelor of Engineering in Electronics, 2017",
        "Anna University, Chennai, India",
    ])
    assert [e.institution for e in entries] == ["Georgia Institute of Technology", "Anna University"]
    assert [e.order for e in entries] == [0, 1]
    assert entries[1].location == "Chennai, India"


def test_capped():
    lines = []
    for year in range(2000, 2008):
        lines += [f"Associate of Arts in Design, {year}", "Springfield Community College"]
    assert len(parse_education_lines(lines, max_entries=5)) == 5


def test_find_degree_ignores_ms_office():
    assert find_degree("MS Office, Google Sheets") is None


def test_find_institution():
    assert find_institution("Harvard University") == ("Harvard University", None)
    assert find_institution("Acme Corp") is None


def test_graduation_date_takes_last_date():
    assert graduation_date("B.A. in Economics | 2014 - 2018") == "2018-05"
    assert graduation_date("MBA, Dec 2020") == "2020-12"
    assert graduation_date("Master of Science 08/2019") == "2019-08"
    assert graduation_date("Bachelor of Arts") is None
