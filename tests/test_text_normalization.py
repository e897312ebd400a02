"""
Unit tests for text_normalization module.

Covers the cleanup applied to raw extracted text before any field extraction.
"""

import pytest
from resume_inference.core.text_normalization import (
    collapse_whitespace,
    non_empty_lines,
    normalize_text,
)


class TestNormalizeText:
    """Cleanup that keeps the line structure intact."""

    def test_empty_input(self):
        assert normalize_text("") == ""

    def test_tabs_and_space_runs(self):
        assert normalize_text("John Doe\t\t|   Engineer") == "John Doe | Engineer"

    def test_line_endings(self):
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"

    def test_bullet_glyphs_removed(self):
        assert normalize_text("\U00002022 Python\n\U00002022 React") == "Python\nReact"

    def test_icon_glyphs_removed(self):
        assert normalize_text("\U0000260e +1 555 0100") == "+1 555 0100"

    def test_zero_width_characters_removed(self):
        assert normalize_text("Jo\U0000200bhn Doe") == "John Doe"

    def test_control_characters_removed(self):
        assert normalize_text("John\x00 Doe\x07") == "John Doe"

    def test_ligatures_expanded(self):
        assert normalize_text("pro\U0000fb01le") == "profile"

    def test_letter_spaced_header(self):
        assert normalize_text("E X P E R I E N C E") == "EXPERIENCE"

    def test_letter_spaced_words_keep_word_gap(self):
        assert normalize_text("J O H N  D O E") == "JOHN DOE"

    def test_blank_line_runs_collapse_to_one_gap(self):
        assert normalize_text("Summary\n\n\n\nText") == "Summary\n\nText"

    def test_leading_and_trailing_blank_lines_dropped(self):
        assert normalize_text("\n\nJohn Doe\n\n") == "John Doe"

    @pytest.mark.parametrize("raw", [
        "JOHN DOE | Engineer\n\U00002022 Python\t, Go\n\n\n\nE X P E R I E N C E",
        "  jane@x.com \r\n\U0000260e 555 0100\x0c page two",
    ])
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once


def test_non_empty_lines():
    assert non_empty_lines("a\n\n  b  \n\n") == ["a", "b"]


def test_collapse_whitespace():
    assert collapse_whitespace("linkedin.com/in/\n  jdoe") == "linkedin.com/in/ jdoe"
