"""Tests for the experience section parser and date normalization."""

import pytest
from resume_inference.core.experience_parser import (
    extract_experiences,
    is_delimiter,
    parse_date_range,
    parse_date_token,
    parse_experience_lines,
    split_header,
)


RESUME = """Jane Smith
jane@smith.dev

EXPERIENCE
Senior Backend Engineer at Acme Corp | Jan 2020 - Present
- Led the migration of the billing platform to Kubernetes
- Reduced p99 latency by 40% across payment services
Backend Developer | Globex Inc | Austin, TX | 06/2016 - 12/2019
- Built REST APIs in Python and Django for the logistics team

EDUCATION
BS in Physics
"""


class TestDates:

    @pytest.mark.parametrize("token, expected", [
        ("03/2020", "2020-03"),
        ("3/2020", "2020-03"),
        ("March 2020", "2020-03"),
        ("Sept 2019", "2019-09"),
        ("Dec. 2018", "2018-12"),
        ("2018", "2018-01"),
        ("13/2020", None),
        ("Spring 2020", None),
    ])
    def test_parse_date_token(self, token, expected):
        assert parse_date_token(token) == expected

    def test_open_ended_range_is_current(self):
        dates = parse_date_range("Acme | Jan 2020 - Present")
        assert dates.start == "2020-01"
        assert dates.end is None
        assert dates.is_current is True

    @pytest.mark.parametrize("word", ["Present", "current", "Now"])
    def test_open_ended_words(self, word):
        assert parse_date_range(f"2019 - {word}").is_current

    def test_closed_range(self):
        dates = parse_date_range("05/2016 – 12/2017")
        assert (dates.start, dates.end, dates.is_current) == ("2016-05", "2017-12", False)

    def test_single_numeric_date(self):
        assert parse_date_range("Acme Corp 05/2021").start == "2021-05"

    def test_no_dates(self):
        assert parse_date_range("Led the platform team") is None


class TestDelimiters:

    @pytest.mark.parametrize("line", [
        "Senior Engineer at Acme Corp",
        "Acme Corp | Backend Developer",
        "2018 - 2020",
        "Globex Inc Jan 2019 - Present",
    ])
    def test_entry_headers(self, line):
        assert is_delimiter(line)

    @pytest.mark.parametrize("line", [
        "- Presented results at the annual summit",
        "Worked at the intersection of data and product.",
        "Python | Django | AWS",
        "Reduced latency by 40%",
        "Responsible for data pipelines at scale across teams",
        "Presented our roadmap to customers at the annual conference",
    ])
    def test_description_lines(self, line):
        assert not is_delimiter(line)


class TestSplitHeader:

    def test_role_at_company(self):
        fields = split_header("Senior Engineer at Acme Corp, San Francisco, CA")
        assert (fields.role, fields.company, fields.location) == ("Senior Engineer", "Acme Corp", "San Francisco, CA")

    def test_role_side_found_by_keyword(self):
        fields = split_header("Acme Corp | Backend Developer | Austin, TX")
        assert (fields.role, fields.company, fields.location) == ("Backend Developer", "Acme Corp", "Austin, TX")

    def test_pipe_order_kept_without_keyword_hint(self):
        fields = split_header("Barista | Blue Bottle")
        assert (fields.role, fields.company) == ("Barista", "Blue Bottle")

    def test_dash_separated(self):
        fields = split_header("Data Analyst - Initech")
        assert (fields.role, fields.company) == ("Data Analyst", "Initech")


class TestExtractExperiences:

    def test_entries_in_document_order(self):
        experiences = extract_experiences(RESUME)
        assert [(e.role, e.company) for e in experiences] == [
            ("Senior Backend Engineer", "Acme Corp"),
            ("Backend Developer", "Globex Inc"),
        ]
        assert [e.order for e in experiences] == [0, 1]

    def test_present_marks_current_with_no_end_date(self):
        first = extract_experiences(RESUME)[0]
        assert first.start_date == "2020-01"
        assert first.is_current is True
        assert first.end_date is None

    def test_closed_entry_dates_and_location(self):
        second = extract_experiences(RESUME)[1]
        assert (second.start_date, second.end_date, second.is_current) == ("2016-06", "2019-12", False)
        assert second.location == "Austin, TX"

    def test_description_lines_without_bullets(self):
        first = extract_experiences(RESUME)[0]
        assert first.description.split("\n") == [
            "Led the migration of the billing platform to Kubernetes",
            "Reduced p99 latency by 40% across payment services",
        ]

    def test_dates_on_their_own_line_attach_to_entry(self):
        lines = ["Engineer at Acme Corp", "March 2018 - May 2020", "- Shipped the mobile app"]
        entry = parse_experience_lines(lines)[0]
        assert (entry.start_date, entry.end_date) == ("2018-03", "2020-05")

    def test_role_and_company_lines_above_dates(self):
        lines = ["Platform Engineer", "Initech", "2015 - 2017", "- Maintained the build farm"]
        entry = parse_experience_lines(lines)[0]
        assert (entry.role, entry.company, entry.start_date) == ("Platform Engineer", "Initech", "2015-01")

    def test_entry_without_company_is_dropped(self):
        assert parse_experience_lines(["Freelance Engineer | 2019 - 2020"]) == []

    def test_capped(self):
        lines = [f"Engineer at Company{i} | 2010 - 2011" for i in range(15)]
        assert len(parse_experience_lines(lines, max_entries=10)) == 10

    def test_no_section(self):
        assert extract_experiences("Jane Smith\nSKILLS\nPython") == []

    def test_at_inside_description_does_not_open_an_entry(self):
        lines = [
            "Data Engineer at Initech | 2016 - 2019",
            "Responsible for data pipelines at scale across teams",
        ]
        entries = parse_experience_lines(lines)
        assert [(e.role, e.company) for e in entries] == [("Data Engineer", "Initech")]
        assert entries[0].description == "Responsible for data pipelines at scale across teams"
