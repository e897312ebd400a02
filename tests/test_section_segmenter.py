"""Tests for section header detection, section collection and the summary."""

import pytest
from resume_inference.core.section_segmenter import (
    SectionKind,
    detect_section_header,
    extract_summary,
    header_block,
    section_lines,
    split_section_header,
)


@pytest.mark.parametrize("line, kind", [
    ("EXPERIENCE", SectionKind.EXPERIENCE),
    ("Work Experience", SectionKind.EXPERIENCE),
    ("Technical Skills:", SectionKind.SKILLS),
    ("== EDUCATION ==", SectionKind.EDUCATION),
    ("PROFESSIONAL SUMMARY", SectionKind.SUMMARY),
    ("EDUCATION & CERTIFICATIONS", SectionKind.EDUCATION),
    ("Projects", SectionKind.PROJECTS),
    ("Languages", SectionKind.OTHER),
])
def test_detect_section_header(line, kind):
    assert detect_section_header(line) is kind


@pytest.mark.parametrize("line", [
    "Built the skills matrix for the education team",
    "John Doe",
    "Technologies: React, Node.js",
    "",
])
def test_ordinary_lines_are_not_headers(line):
    assert detect_section_header(line) is None


def test_inline_header_keeps_remainder():
    assert split_section_header("Skills: Python, Go") == (SectionKind.SKILLS, "Python, Go")


class TestSectionLines:

    LINES = [
        "John Doe",
        "EXPERIENCE",
        "Engineer at Acme",
        "Built things",
        "SKILLS",
        "Python, Go",
        "Languages: English, Spanish",
        "EDUCATION",
        "BS in Physics",
        "Skills: Docker",
    ]

    def test_collects_until_next_header(self):
        assert section_lines(self.LINES, SectionKind.EXPERIENCE) == ["Engineer at Acme", "Built things"]

    def test_split_sections_are_merged_and_inline_content_kept(self):
        assert section_lines(self.LINES, SectionKind.SKILLS) == [
            "Python, Go",
            "Languages: English, Spanish",
            "Docker",
        ]

    def test_missing_section(self):
        assert section_lines(self.LINES, SectionKind.PROJECTS) == []

    def test_language_category_does_not_leave_skills(self):
        lines = ["SKILLS", "Languages:", "Python, Go", "EXPERIENCE", "Engineer at Acme"]
        assert section_lines(lines, SectionKind.SKILLS) == ["Languages:", "Python, Go"]


def test_header_block_stops_at_first_section():
    lines = ["Jane Smith", "Developer", "SUMMARY", "Text"]
    assert header_block(lines) == ["Jane Smith", "Developer"]


class TestSummary:

    def test_summary_section_lines_joined(self):
        text = (
            "Jane Smith\n\nSUMMARY\n"
            "Backend engineer with eight years of experience.\n"
            "short line\n"
            "Focused on distributed systems and reliability.\n\n"
            "EXPERIENCE\nEngineer at Acme"
        )
        assert extract_summary(text) == (
            "Backend engineer with eight years of experience. "
            "Focused on distributed systems and reliability."
        )

    def test_at_most_five_lines(self):
        body = "\n".join(f"Summary sentence number {i} goes here." for i in range(8))
        summary = extract_summary("PROFILE\n" + body)
        assert summary.count("Summary sentence") == 5

    def test_capped_at_max_chars(self):
        text = "OBJECTIVE\n" + "x" * 30 + " " + "y" * 600
        assert len(extract_summary(text, max_chars=500)) == 500

    def test_unheaded_prose_in_header_block(self):
        text = (
            "Jane Smith\njane@smith.dev\n"
            "Product-minded engineer who turns ambiguous problems into shipped software.\n"
            "EXPERIENCE\nEngineer at Acme"
        )
        assert extract_summary(text).startswith("Product-minded engineer")

    def test_no_summary(self):
        assert extract_summary("Jane Smith\nEXPERIENCE\nEngineer at Acme") is None
