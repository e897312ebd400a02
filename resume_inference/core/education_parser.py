"""
Education parsing: degree lines paired with institution lines.

A degree line names a degree ("Bachelor of Science in Computer Science",
"M.S. in Data Science", "PhD in Physics"). The institution is looked for on
the next line, then on the degree line itself, then on the line above:

    Bachelor of Science in Computer Science, 2018
    Stanford University, Stanford, CA

    University of Texas at Austin
    B.A. in Economics | 2014 - 2018

A year on the degree line becomes the graduation date, with the month
defaulted to May ("2018" -> "2018-05").
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from resume_inference.core.experience_parser import MONTHS, strip_bullet
from resume_inference.core.schemas import Education
from resume_inference.core.section_segmenter import SectionKind, section_lines
from resume_inference.core.text_normalization import non_empty_lines

logger = logging.getLogger(__name__)


# ===== DEGREES =====

DEGREE_RE = re.compile(
    r"(?<![A-Za-z])(?P<degree>"
    r"(?:Bachelor|Master|Associate)(?:['’]?s)?(?:\s+of\s+(?:Applied\s+)?(?:Science|Arts|Fine\s+Arts|Engineering|Technology|Business\s+Administration|Laws|Education|Commerce))?"
    r"|Doctor\s+of\s+Philosophy|Doctorate"
    r"|Ph\.?\s?D\.?"
    r"|M\.?B\.?A\.?"
    r"|B\.\s?S\.?|B\.\s?Sc\.?|B\.\s?A\.?|M\.\s?S\.?|M\.\s?Sc\.?|M\.\s?A\.?|B\.\s?E\.?"
    r"|BSc|MSc|B\.?Tech|M\.?Tech|BS|BA|MS"
    r")(?![A-Za-z])"
    r"(?:\s+degree)?"
    r"(?:,?\s+(?:in|of)\s+(?P<field>[A-Za-z][A-Za-z&/' ]*?))?"
    r"(?=\s*(?:[,|(;]|\s[-–—]\s|\d|$))",
)

# Bare abbreviations ("BS", "MS") only count at the start of a line
BARE_ABBREVIATIONS = {"BS", "BA", "MS"}


# ===== INSTITUTIONS =====

_CAPWORD = r"[A-Z][\w.&'\-]*"

INSTITUTION_RE = re.compile(
    rf"(?P<institution>(?:{_CAPWORD}\s+)*?"
    r"(?:University|College|Institute|School|Academy|Polytechnic|Conservatory)\b"
    rf"(?:\s+(?:of|for|and|&|at)\s+{_CAPWORD}(?:\s+{_CAPWORD})*)*)"
)

LOCATION_TAIL_RE = re.compile(r"^\s*[,|\-–—]\s*([A-Z][A-Za-z.' ]+,\s*(?:[A-Z]{2}|[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?))\b")


# ===== DATES =====

YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")
MONTH_YEAR_RE = re.compile(
    r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+((?:19|20)\d{2})\b",
    re.IGNORECASE,
)
NUMERIC_MONTH_YEAR_RE = re.compile(r"(?<!\d)(\d{1,2})/((?:19|20)\d{2})(?!\d)")

GRADUATION_MONTH = 5
DESCRIPTION_MIN_CHARS = 10
DESCRIPTION_MAX_CHARS = 1000


def graduation_date(line: str) -> Optional[str]:
    """
    Graduation date from a degree line, as "YYYY-MM".

    The last date on the line wins ("2014 - 2018" -> "2018-05"). An explicit
    month is kept; a bare year gets May.

    Examples:
        "B.S. in Physics, 2018" -> "2018-05"
        "MBA, Dec 2020" -> "2020-12"
        "Master of Science 08/2019" -> "2019-08"
    """
    candidates: List[Tuple[int, str]] = []
    for m in MONTH_YEAR_RE.finditer(line):
        candidates.append((m.start(), f"{m.group(2)}-{MONTHS[m.group(1).lower()[:3]]:02d}"))
    for m in NUMERIC_MONTH_YEAR_RE.finditer(line):
        month = int(m.group(1))
        if 1 <= month <= 12:
            candidates.append((m.start(), f"{m.group(2)}-{month:02d}"))
    if not candidates:
        for m in YEAR_RE.finditer(line):
            candidates.append((m.start(), f"{m.group(1)}-{GRADUATION_MONTH:02d}"))
    if not candidates:
        return None
    return max(candidates)[1]


def find_degree(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """(degree, field) when the line names a degree."""
    for m in DEGREE_RE.finditer(line):
        degree = " ".join(m.group("degree").split())
        if degree in BARE_ABBREVIATIONS and m.start() != 0:
            continue
        field = m.group("field")
        field = " ".join(field.split()).strip(" &/") if field else None
        return degree, field or None
    return None


def find_institution(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """(institution, location) when the line names a school."""
    m = INSTITUTION_RE.search(line)
    if not m:
        return None
    institution = m.group("institution").strip()
    tail = LOCATION_TAIL_RE.match(line[m.end():])
    return institution, tail.group(1).strip() if tail else None


def parse_education_lines(lines: Sequence[str], max_entries: int = 5) -> List[Education]:
    lines = [strip_bullet(line) for line in lines]
    degree_indexes = [i for i, line in enumerate(lines) if find_degree(line)]

    entries: List[Education] = []
    for n, i in enumerate(degree_indexes):
        degree, field = find_degree(lines[i])
        next_degree = degree_indexes[n + 1] if n + 1 < len(degree_indexes) else len(lines)

        # Institution: next line, same line, line above
        institution_index = None
        found = None
        for j in (i + 1, i, i - 1):
            if 0 <= j < len(lines) and (j == i or j not in degree_indexes):
                found = find_institution(lines[j])
                if found:
                    institution_index = j
                    break
        if found is None:
            logger.debug(f"degree without institution skipped: {lines[i]!r}")
            continue

        institution, location = found
        grad = graduation_date(lines[i])
        if grad is None and institution_index != i:
            grad = graduation_date(lines[institution_index])

        details = [
            lines[k] for k in range(i + 1, next_degree)
            if k != institution_index and len(lines[k]) >= DESCRIPTION_MIN_CHARS
            and not (k + 1 == next_degree and find_institution(lines[k]))
        ]
        description = "\n".join(details)[:DESCRIPTION_MAX_CHARS] or None

        entries.append(Education(
            institution=institution,
            degree=degree,
            field=field,
            location=location,
            graduation_date=grad,
            description=description,
            order=len(entries),
        ))
        if len(entries) >= max_entries:
            break
    return entries


def extract_education(text: str, max_entries: int = 5) -> List[Education]:
    """
    Education entries from the education section, in document order.

    A degree line without a nearby institution is skipped.
    """
    lines = section_lines(non_empty_lines(text), SectionKind.EDUCATION)
    entries = parse_education_lines(lines, max_entries=max_entries)
    logger.info(f"education: {len(entries)} entries from {len(lines)} lines")
    return entries
