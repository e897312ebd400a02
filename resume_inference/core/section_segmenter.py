"""
Section segmentation.

Resumes are split into regions by their header lines ("EXPERIENCE",
"Technical Skills:", "Education"). A header line is recognised when:
- the whole line is a known keyword (trailing colon and decorations ignored)
- the text before a colon is a known keyword ("Skills: Python, Go"); the text
  after the colon is content of the section
- an all-caps line of at most five words starts with a known keyword
  ("EXPERIENCE & INTERNSHIPS")

Each section is collected by a two-state scanner: OUTSIDE until its own
header is seen, IN_SECTION until a different section's header appears.
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from resume_inference.core.text_normalization import non_empty_lines
from resume_inference.core.vocabulary import SECTION_HEADERS, SKILL_CATEGORY_WORDS

logger = logging.getLogger(__name__)


class SectionKind(str, Enum):
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    OTHER = "other"


class ScanState(Enum):
    OUTSIDE = "outside"
    IN_SECTION = "in_section"


_KEYWORD_TO_KIND = {
    keyword: SectionKind(kind)
    for kind, keywords in SECTION_HEADERS.items()
    for keyword in keywords
}

# Decorations around header text: "== SKILLS ==", "## Experience", "Education:"
_DECORATION_CHARS = "#*=_-:|~>. "
HEADER_MAX_WORDS = 5
HEADER_MAX_LENGTH = 60

# Summary collection (lines longer than this are kept)
SUMMARY_LINE_MIN_CHARS = 20
SUMMARY_MAX_LINES = 5

# An unheaded summary paragraph in the header block
UNHEADED_SUMMARY_MIN_CHARS = 60
UNHEADED_SUMMARY_MIN_WORDS = 8


def _header_key(text: str) -> str:
    key = text.strip().strip(_DECORATION_CHARS)
    return re.sub(r"\s+", " ", key).lower()


def split_section_header(line: str) -> Tuple[Optional[SectionKind], str]:
    """
    Classify a line as a section header.

    Returns (kind, remainder): kind is None for ordinary lines, remainder is
    any content following an inline "Header: content" colon.

    Examples:
        "EXPERIENCE" -> (EXPERIENCE, "")
        "Technical Skills:" -> (SKILLS, "")
        "Skills: Python, Go" -> (SKILLS, "Python, Go")
        "EDUCATION & CERTIFICATIONS" -> (EDUCATION, "")
        "Built the skills matrix" -> (None, "")
    """
    stripped = line.strip()
    if not stripped or len(stripped) > 200:
        return None, ""

    key = _header_key(stripped)
    if key in _KEYWORD_TO_KIND and len(stripped) <= HEADER_MAX_LENGTH:
        return _KEYWORD_TO_KIND[key], ""

    if ":" in stripped:
        head, remainder = stripped.split(":", 1)
        head_key = _header_key(head)
        # "Technologies: React, Node" under a job is a detail line
        if head_key in SKILL_CATEGORY_WORDS and remainder.strip():
            return None, ""
        if head_key in _KEYWORD_TO_KIND:
            return _KEYWORD_TO_KIND[head_key], remainder.strip()

    letters = [c for c in stripped if c.isalpha()]
    if letters and stripped.upper() == stripped and len(key.split()) <= HEADER_MAX_WORDS:
        for keyword, kind in _KEYWORD_TO_KIND.items():
            if key.startswith(keyword + " "):
                return kind, ""

    return None, ""


def detect_section_header(line: str) -> Optional[SectionKind]:
    """Section kind a header line opens, or None for ordinary lines."""
    return split_section_header(line)[0]


def _is_skill_category(line: str) -> bool:
    """'Languages: Python, Go' style line inside a skills section."""
    if ":" not in line:
        return False
    head = _header_key(line.split(":", 1)[0])
    return head in SKILL_CATEGORY_WORDS


def section_lines(lines: Sequence[str], kind: SectionKind) -> List[str]:
    """
    Content lines belonging to sections of `kind`, in document order.

    A header of the same kind re-enters the section (split sections are
    merged); a header of any other kind leaves it. Inline header content
    ("Skills: Python, Go") is returned as a content line.
    """
    state = ScanState.OUTSIDE
    collected: List[str] = []

    for line in lines:
        if state is ScanState.IN_SECTION and kind is SectionKind.SKILLS and _is_skill_category(line):
            collected.append(line)
            continue

        header, remainder = split_section_header(line)
        if header is None:
            if state is ScanState.IN_SECTION:
                collected.append(line)
            continue

        if header is kind:
            state = ScanState.IN_SECTION
            if remainder:
                collected.append(remainder)
        elif state is ScanState.IN_SECTION:
            state = ScanState.OUTSIDE

    logger.debug(f"section {kind.value}: {len(collected)} lines")
    return collected


def header_block(lines: Sequence[str], max_lines: int = 15) -> List[str]:
    """
    Lines of the document header: the first `max_lines` lines, cut at the
    first section header.
    """
    block: List[str] = []
    for line in lines[:max_lines]:
        if detect_section_header(line) is not None:
            break
        block.append(line)
    return block


# ============================================================================
# Summary
# ============================================================================

def _cap(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip()


def _unheaded_summary(lines: Sequence[str]) -> List[str]:
    """Prose paragraph in the header block of a resume with no summary header."""
    prose = []
    for line in header_block(lines):
        if "@" in line or "http" in line.lower() or "|" in line:
            continue
        if len(line) >= UNHEADED_SUMMARY_MIN_CHARS and len(line.split()) >= UNHEADED_SUMMARY_MIN_WORDS:
            prose.append(line)
    return prose


def extract_summary(text: str, max_chars: int = 500) -> Optional[str]:
    """
    Professional summary paragraph.

    Takes up to five lines longer than 20 characters from the summary
    section, joined with spaces and capped at `max_chars`. Without a summary
    header, a prose paragraph in the header block is used instead.
    """
    lines = non_empty_lines(text)
    body = [line for line in section_lines(lines, SectionKind.SUMMARY) if len(line) > SUMMARY_LINE_MIN_CHARS]
    if not body:
        body = _unheaded_summary(lines)
    if not body:
        return None

    content = " ".join(body[:SUMMARY_MAX_LINES])
    return _cap(content, max_chars) or None
