"""Tests for name, role and location extraction from the resume header."""

from resume_inference.core.identity_extractors import (
    extract_location,
    extract_name,
    extract_role,
    looks_like_name,
)


COMPOSITE_HEADER = """JOHN DOE | Senior Backend Engineer
john.doe@example.com | +1 415 555 0100 | San Francisco, CA

SUMMARY
Backend engineer with 8 years of experience building payment systems.
"""

STACKED_HEADER = """Jane Smith
Full-Stack Developer
Austin, TX | jane@smith.dev

EXPERIENCE
Developer at Initech | 2019 - Present
"""


class TestName:

    def test_composite_line_first_segment_title_cased(self):
        assert extract_name(COMPOSITE_HEADER) == "John Doe"

    def test_first_plausible_header_line(self):
        assert extract_name(STACKED_HEADER) == "Jane Smith"

    def test_skips_document_title_and_contact_lines(self):
        text = "Curriculum Vitae\njane@smith.dev\nJane Smith\nDeveloper"
        assert extract_name(text) == "Jane Smith"

    def test_falls_back_to_lines_above_email(self):
        text = "SUMMARY\nBuilding reliable systems since 2012.\nMaria Garcia\nmaria@garcia.io"
        assert extract_name(text) == "Maria Garcia"

    def test_falls_back_to_label(self):
        text = "EXPERIENCE\nDeveloper at Initech\nName: Peter Gibbons"
        assert extract_name(text) == "Peter Gibbons"

    def test_no_name(self):
        assert extract_name("SKILLS\nPython, Go") is None


def test_looks_like_name():
    assert looks_like_name("John Doe")
    assert looks_like_name("MARY-JANE O'NEIL")
    assert not looks_like_name("Senior Backend Engineer")
    assert not looks_like_name("Work Experience")
    assert not looks_like_name("John")
    assert not looks_like_name("John Doe 2020")
    assert not looks_like_name("Stanford University")


class TestRole:

    def test_composite_line_second_segment(self):
        assert extract_role(COMPOSITE_HEADER) == "Senior Backend Engineer"

    def test_keyword_line_in_header(self):
        assert extract_role(STACKED_HEADER) == "Full-Stack Developer"

    def test_all_caps_title_is_re_cased(self):
        text = "JANE SMITH\nSENIOR QA ENGINEER\njane@smith.dev"
        assert extract_role(text) == "Senior QA Engineer"

    def test_dates_are_stripped(self):
        text = "Jane Smith | Lead Engineer 2019 - Present\njane@smith.dev"
        assert extract_role(text) == "Lead Engineer"

    def test_falls_back_to_first_experience_entry(self):
        text = "Jane Smith\njane@smith.dev\n\nEXPERIENCE\nSite Reliability Engineer at Globex | 2018 - 2021\n"
        assert extract_role(text) == "Site Reliability Engineer"

    def test_falls_back_to_label(self):
        text = "SUMMARY\nSeasoned builder of things.\nPosition: Solutions Architect"
        assert extract_role(text) == "Solutions Architect"

    def test_experience_company_line_is_not_a_role(self):
        text = "Jane Smith\njane@smith.dev\n\nEXPERIENCE\nGlobex Corporation | 2019 - 2023\n- Led a team at Globex\n"
        assert extract_role(text) is None

    def test_experience_fallback_skips_lines_without_title_words(self):
        text = (
            "Jane Smith\njane@smith.dev\n\nEXPERIENCE\n"
            "Initech | 2015 - 2017\n"
            "Acme Corp | Staff Engineer | 2018 - 2021\n"
        )
        assert extract_role(text) == "Staff Engineer"

    def test_no_role(self):
        assert extract_role("Jane Smith\njane@smith.dev") is None


class TestLocation:

    def test_city_and_state_code(self):
        assert extract_location(COMPOSITE_HEADER) == "San Francisco, CA"

    def test_stacked_header(self):
        assert extract_location(STACKED_HEADER) == "Austin, TX"

    def test_technology_pairs_are_not_places(self):
        text = "Jane Smith\nReact, Native developer\nSKILLS\nPython, Django"
        assert extract_location(text) is None

    def test_known_place_beats_longer_candidate(self):
        text = "Jane Smith\nAcme Widget Works, Initech | Toronto, Canada"
        assert extract_location(text) == "Toronto, Canada"

    def test_falls_back_to_whole_document(self):
        text = "Jane Smith\njane@smith.dev\n\nEXPERIENCE\nEngineer at Acme Corp, Denver, CO\n"
        assert extract_location(text) == "Denver, CO"

    def test_soft_skill_list_is_not_a_place(self):
        text = "Jane Doe\njane@x.com\nSKILLS\nLeadership, Communication, Teamwork"
        assert extract_location(text) is None

    def test_prose_pair_outside_header_is_not_a_place(self):
        text = "Jane Doe\njane@x.com\n\nEXPERIENCE\nWorked with Marketing, Sales and Finance teams\n"
        assert extract_location(text) is None
