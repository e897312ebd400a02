"""
Identity field extraction: candidate name, current role and location.

All three read the document header: the lines before the first section
header, at most fifteen of them. Typical header shapes:

    JOHN DOE | Senior Backend Engineer
    john.doe@example.com | +1 415 555 0100 | San Francisco, CA

    Jane Smith
    Full-Stack Developer
    Austin, TX  |  jane@smith.dev
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from resume_inference.core.contact_extractors import EMAIL_RE, PHONE_RE
from resume_inference.core.experience_parser import is_delimiter
from resume_inference.core.section_segmenter import (
    SectionKind,
    detect_section_header,
    header_block,
    section_lines,
)
from resume_inference.core.text_normalization import non_empty_lines
from resume_inference.core.vocabulary import (
    ALL_SECTION_KEYWORDS,
    DOCUMENT_TITLE_WORDS,
    LOCATION_TECH_EXCLUSIONS,
    ORGANIZATION_KEYWORD_RE,
    PLACE_KEYWORDS,
    ROLE_KEYWORD_RE,
    US_STATE_CODES,
)

logger = logging.getLogger(__name__)


HEADER_SCAN_LINES = 15
NAME_MIN_TOKENS = 2
NAME_MAX_TOKENS = 5
ROLE_MAX_LENGTH = 100
ROLE_MAX_WORDS = 10
NAME_EMAIL_WINDOW = 200

COMPOSITE_SEPARATOR_RE = re.compile(r"\s*\|\s*")

# Letters plus in-name punctuation: "O'Neil", "Mary-Jane", "J."
NAME_TOKEN_RE = re.compile(r"^[^\W\d_](?:[^\W\d_]|[.'\-])*$")

NAME_LABEL_RE = re.compile(r"^\s*(?:full\s+)?name\s*[:\-]\s*(.+)$", re.IGNORECASE | re.MULTILINE)
ROLE_LABEL_RE = re.compile(
    r"^\s*(?:job\s+title|title|role|position|designation|current\s+role)\s*[:\-]\s*(.+)$",
    re.IGNORECASE | re.MULTILINE,
)

_MONTHS = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"

# Dates that trail a title line: "2019 - Present", "Jan 2020 – Dec 2022", "05/2021"
DATE_FRAGMENT_RE = re.compile(
    rf"(?:\b{_MONTHS}\s+)?\b(?:\d{{1,2}}/)?(?:19|20)\d{{2}}\b"
    rf"(?:\s*(?:-|–|—|to)\s*(?:(?:{_MONTHS}\s+)?(?:\d{{1,2}}/)?(?:19|20)\d{{2}}\b|present|current|now))?",
    re.IGNORECASE,
)

# Acronyms kept upper-case when an all-caps title is re-cased
TITLE_ACRONYMS = frozenset({
    "QA", "UI", "UX", "AI", "ML", "IT", "SRE", "VP", "CTO", "CEO", "CFO", "COO",
    "AWS", "GCP", "API", "SDK", "HR", "PM", "SEO", "BI", "II", "III", "IV",
})


# ============================================================================
# Shared helpers
# ============================================================================

def _segments(line: str) -> List[str]:
    return [s for s in COMPOSITE_SEPARATOR_RE.split(line) if s]


def _is_contact(text: str) -> bool:
    """Line or segment carrying an email, URL or phone number."""
    lowered = text.lower()
    if "@" in text or "http" in lowered or "www." in lowered or "linkedin" in lowered:
        return True
    if EMAIL_RE.search(text):
        return True
    for m in PHONE_RE.finditer(text):
        if sum(c.isdigit() for c in m.group(0)) >= 10:
            return True
    return False


def _title_case(text: str) -> str:
    """Re-case an all-caps phrase, leaving known acronyms alone."""
    words = []
    for word in text.split():
        bare = word.strip(",.()")
        words.append(word if bare in TITLE_ACRONYMS else word.title())
    return " ".join(words)


def _strip_dates(text: str) -> str:
    text = DATE_FRAGMENT_RE.sub(" ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip(" ,|-–—·()")


def _header_lines(text: str) -> List[str]:
    return header_block(non_empty_lines(text), max_lines=HEADER_SCAN_LINES)


# ============================================================================
# Name
# ============================================================================

def looks_like_name(candidate: str) -> bool:
    """
    2-5 word-like tokens with no digits, contact markers, section keywords or
    job-title words.

    Examples:
        "John Doe" -> True
        "MARY-JANE O'NEIL" -> True
        "Senior Backend Engineer" -> False
        "Work Experience" -> False
    """
    candidate = candidate.strip()
    if not candidate or not any(c.isalpha() for c in candidate):
        return False
    if any(c.isdigit() for c in candidate) or _is_contact(candidate):
        return False

    key = candidate.lower().rstrip(":")
    if key in ALL_SECTION_KEYWORDS or key in DOCUMENT_TITLE_WORDS:
        return False

    tokens = candidate.split()
    if not NAME_MIN_TOKENS <= len(tokens) <= NAME_MAX_TOKENS:
        return False
    if not all(NAME_TOKEN_RE.match(token) for token in tokens):
        return False

    return not ROLE_KEYWORD_RE.search(candidate) and not ORGANIZATION_KEYWORD_RE.search(candidate)


def _display_name(candidate: str) -> str:
    candidate = " ".join(candidate.split())
    if candidate.isupper():
        return candidate.title()
    return candidate


def _name_from_lines(lines: Sequence[str]) -> Optional[str]:
    for line in lines:
        segments = _segments(line)
        if len(segments) > 1:
            if looks_like_name(segments[0]):
                return segments[0]
            continue
        if _is_contact(line):
            continue
        if looks_like_name(line):
            return line
    return None


def _name_near_email(text: str) -> Optional[str]:
    m = EMAIL_RE.search(text)
    if not m:
        return None
    line_start = text.rfind("\n", 0, m.start()) + 1
    window = text[max(0, line_start - NAME_EMAIL_WINDOW):line_start]
    # Closest line to the address first
    lines = [line.strip() for line in window.split("\n") if line.strip()]
    return _name_from_lines(list(reversed(lines)))


def _name_from_label(text: str) -> Optional[str]:
    m = NAME_LABEL_RE.search(text)
    if m and looks_like_name(m.group(1)):
        return m.group(1).strip()
    return None


def extract_name(text: str) -> Optional[str]:
    """
    Candidate's full name.

    Header lines are scanned top-down; on composite lines ("JOHN DOE |
    Engineer") only the first segment is considered. Falls back to the lines
    just above the first email address, then to a "Name:" label. All-caps
    names are title-cased.
    """
    for strategy in (
        lambda t: _name_from_lines(_header_lines(t)),
        _name_near_email,
        _name_from_label,
    ):
        name = strategy(text)
        if name:
            logger.debug(f"name -> {name!r}")
            return _display_name(name)
    return None


# ============================================================================
# Role
# ============================================================================

def _clean_role(candidate: str) -> Optional[str]:
    role = _strip_dates(candidate)
    if not role or _is_contact(role) or detect_section_header(role) is not None:
        return None
    if len(role.split()) > ROLE_MAX_WORDS or role.endswith("."):
        return None
    return role


def _role_from_header(lines: Sequence[str]) -> Optional[str]:
    # Composite "Name | Role" lines win over standalone title lines
    for line in lines:
        segments = _segments(line)
        if len(segments) > 1 and looks_like_name(segments[0]):
            role = _clean_role(segments[1])
            if role:
                return role

    for line in lines:
        for segment in _segments(line):
            if ROLE_KEYWORD_RE.search(segment):
                role = _clean_role(segment)
                if role:
                    return role
    return None


def _role_from_experience(text: str) -> Optional[str]:
    """First experience header whose title side carries a job-title keyword."""
    for line in section_lines(non_empty_lines(text), SectionKind.EXPERIENCE):
        if not is_delimiter(line):
            continue
        if " at " in line:
            candidates = [line.split(" at ", 1)[0]]
        else:
            segments = _segments(line)
            candidates = segments if len(segments) > 1 else []
        for candidate in candidates:
            if ROLE_KEYWORD_RE.search(candidate):
                role = _clean_role(candidate)
                if role:
                    return role
    return None


def _role_from_label(text: str) -> Optional[str]:
    m = ROLE_LABEL_RE.search(text)
    return _clean_role(m.group(1)) if m else None


def extract_role(text: str) -> Optional[str]:
    """
    Candidate's current job title.

    Sources, first hit wins:
    1. second segment of a "Name | Role" header line
    2. a header line (or segment) containing a job-title keyword
    3. the first experience entry header with a job-title keyword
       ("Role at Company", "Company | Role")
    4. a "Title:" / "Role:" / "Position:" label

    Date fragments are removed, all-caps titles re-cased, and the result is
    capped at 100 characters.
    """
    for strategy in (
        lambda t: _role_from_header(_header_lines(t)),
        _role_from_experience,
        _role_from_label,
    ):
        role = strategy(text)
        if role:
            if role.isupper():
                role = _title_case(role)
            logger.debug(f"role -> {role!r}")
            return role[:ROLE_MAX_LENGTH].rstrip()
    return None


# ============================================================================
# Location
# ============================================================================

# "San Francisco, CA", "Brooklyn, New York", "Toronto, Canada". The pattern is
# a lookahead so overlapping pairs ("Acme Corp, Austin, TX") are all seen.
LOCATION_RE = re.compile(
    r"(?<![\w])(?=((?:[A-Z][A-Za-z.'\-]+[ \t]+){0,2}[A-Z][A-Za-z.'\-]+),[ \t]*"
    r"([A-Z]{2,}|[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){0,2})(?![\w]))"
)

_CITY_NOISE = frozenset({"remote", "hybrid", "onsite", "based", "location", "address"})


def _trim_region(region: str) -> Tuple[str, bool]:
    """Shortest known place at the start of the region, if any."""
    words = region.split()
    for k in range(len(words), 0, -1):
        prefix = " ".join(words[:k])
        if prefix.lower() in PLACE_KEYWORDS or prefix in US_STATE_CODES:
            return prefix, True
    return words[0], False


def _trim_city(city: str) -> str:
    words = city.split()
    while len(words) > 1 and (
        ROLE_KEYWORD_RE.fullmatch(words[0])
        or ORGANIZATION_KEYWORD_RE.fullmatch(words[0])
        or words[0].lower() in _CITY_NOISE
    ):
        words = words[1:]
    return " ".join(words)


def _location_candidates(lines: Sequence[str]) -> List[Tuple[bool, str]]:
    candidates = []
    for line in lines:
        for m in LOCATION_RE.finditer(line):
            city = _trim_city(m.group(1))
            region, known_place = _trim_region(m.group(2))
            words = {w.lower() for w in (city + " " + region).split()}
            if words & LOCATION_TECH_EXCLUSIONS:
                continue
            if ROLE_KEYWORD_RE.search(city) or ORGANIZATION_KEYWORD_RE.search(city):
                continue
            if words & ALL_SECTION_KEYWORDS:
                continue
            known_place = known_place or city.lower() in PLACE_KEYWORDS
            candidates.append((known_place, f"{city}, {region}"))
    return candidates


def extract_location(text: str) -> Optional[str]:
    """
    Candidate's location as "City, Region".

    "City, Region" pairs are collected from the header; pairs containing
    technology words ("React, Native") are dropped. Pairs naming a known
    state, country or "Remote" win; among the rest the longest is chosen.
    When the header has no pair, the rest of the document is searched for
    known places only.
    """
    lines = non_empty_lines(text)
    candidates = _location_candidates(header_block(lines, max_lines=HEADER_SCAN_LINES))
    if not candidates:
        # Outside the header only a known place counts: "Leadership, Communication"
        candidates = [c for c in _location_candidates(lines) if c[0]]
    if not candidates:
        return None

    # Stable sort: known places first, then longest, then document order
    ranked = sorted(candidates, key=lambda c: (not c[0], -len(c[1])))
    logger.debug(f"location candidates: {candidates}")
    return ranked[0][1]
