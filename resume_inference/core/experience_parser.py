"""
Work experience parser.

The experience section is read line by line by a two-state machine:

    NO_ENTRY --delimiter--> BUILDING_ENTRY --delimiter--> BUILDING_ENTRY (new entry)

A delimiter line opens a new entry. It is a "Title at Company" line whose
title holds a job-title keyword, a " | " line with such a keyword, or a line
with a date range:

    Senior Engineer at Acme Corp                 Jan 2020 - Present
    Acme Corp | Backend Developer | Austin, TX | 2018 - 2020
    05/2016 - 12/2017

Other lines of at least 10 characters are description of the open entry.
Only entries with both a role and a company are emitted.

Dates are normalized to "YYYY-MM"; an open-ended range (Present / Current /
Now) marks the entry current and leaves the end date empty.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from resume_inference.core.schemas import Experience
from resume_inference.core.section_segmenter import SectionKind, section_lines
from resume_inference.core.text_normalization import non_empty_lines
from resume_inference.core.vocabulary import PAST_TENSE_VERBS, PLACE_KEYWORDS, ROLE_KEYWORD_RE, US_STATE_CODES

logger = logging.getLogger(__name__)


# ============================================================================
# Dates
# ============================================================================

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH_NAME = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"

# One side of a range: "03/2020", "March 2020", "Mar. 2020", "2020"
DATE_TOKEN = rf"(?:\d{{1,2}}[/.\-]\d{{4}}|{_MONTH_NAME}\s+\d{{4}}|\d{{4}})"
OPEN_END = r"(?:present|current|now|today|ongoing)"

DATE_RANGE_RE = re.compile(
    rf"(?<![\w/])({DATE_TOKEN})\s*(?:-|–|—|to|until)\s*({OPEN_END}|{DATE_TOKEN})(?![\w/])",
    re.IGNORECASE,
)
SINGLE_DATE_RE = re.compile(r"(?<![\w/])(\d{1,2})/(\d{4})(?![\w/])")

MIN_YEAR = 1950
MAX_YEAR = 2100


@dataclass(frozen=True)
class DateRange:
    start: Optional[str]
    end: Optional[str]
    is_current: bool
    span: Tuple[int, int]


def parse_date_token(token: str) -> Optional[str]:
    """
    Normalize one date to "YYYY-MM".

    Examples:
        "03/2020" -> "2020-03"
        "Sept 2019" -> "2019-09"
        "2018" -> "2018-01"
        "13/2020" -> None
    """
    token = token.strip().lower()

    m = re.fullmatch(r"(\d{1,2})[/.\-](\d{4})", token)
    if m:
        month, year = int(m.group(1)), int(m.group(2))
    else:
        m = re.fullmatch(r"([a-z]+)\.?\s+(\d{4})", token)
        if m:
            month, year = MONTHS.get(m.group(1)[:3], 0), int(m.group(2))
        elif re.fullmatch(r"\d{4}", token):
            month, year = 1, int(token)
        else:
            return None

    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        return None
    return f"{year:04d}-{month:02d}"


def parse_date_range(line: str) -> Optional[DateRange]:
    """
    First date range (or lone MM/YYYY date) on a line.

    Examples:
        "Jan 2020 - Present" -> start "2020-01", end None, current
        "05/2016 – 12/2017" -> start "2016-05", end "2017-12"
        "2014 to 2018" -> start "2014-01", end "2018-01"
    """
    m = DATE_RANGE_RE.search(line)
    if m:
        start = parse_date_token(m.group(1))
        end_text = m.group(2)
        if re.fullmatch(OPEN_END, end_text, re.IGNORECASE):
            return DateRange(start, None, True, m.span())
        return DateRange(start, parse_date_token(end_text), False, m.span())

    m = SINGLE_DATE_RE.search(line)
    if m:
        return DateRange(parse_date_token(m.group(0)), None, False, m.span())
    return None


# ============================================================================
# Entry header lines
# ============================================================================

DESCRIPTION_MIN_CHARS = 10
DELIMITER_MAX_CHARS = 120
AT_TITLE_MAX_CHARS = 60
DESCRIPTION_MAX_CHARS = 2000

# Carried lines: a title or company line sitting just above a date line
CARRY_MAX_CHARS = 60
CARRY_MAX_LINES = 2

BULLET_PREFIX_RE = re.compile(r"^(?:[-*+>o]\s+|\d{1,2}[.)]\s+)")
SEGMENT_SPLIT_RE = re.compile(r"\s*\|\s*")
DASH_SPLIT_RE = re.compile(r"\s+[-–—]\s+|,\s+")

# "City, ST" or "City, Country" as a whole segment, or trailing a company
LOCATION_SEGMENT_RE = re.compile(r"^[A-Z][A-Za-z.' ]+,\s*(?:[A-Z]{2}|[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)$")
TRAILING_LOCATION_RE = re.compile(r",\s*([A-Z][A-Za-z.' ]+,\s*(?:[A-Z]{2}|[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?))$")
REMOTE_RE = re.compile(r"^(?:remote|hybrid|on-?site)(?:\s*\(.*\))?$", re.IGNORECASE)


def strip_bullet(line: str) -> str:
    return BULLET_PREFIX_RE.sub("", line.strip()).strip()


def _is_location(segment: str) -> bool:
    if REMOTE_RE.match(segment):
        return True
    if not LOCATION_SEGMENT_RE.match(segment):
        return False
    region = segment.rsplit(",", 1)[1].strip()
    return region in US_STATE_CODES or region.lower() in PLACE_KEYWORDS


def _clean(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip(" ,|-–—·()")


def _recase(text: str) -> str:
    # "ACME CORPORATION" -> "Acme Corporation"; short acronyms stay
    if text.isupper() and len(text) > 4:
        return text.title()
    return text


def is_delimiter(line: str) -> bool:
    """True when a line opens a new experience entry."""
    if len(line) > DELIMITER_MAX_CHARS or BULLET_PREFIX_RE.match(line):
        return False
    if parse_date_range(line) is not None:
        return True
    if line.rstrip().endswith("."):
        return False
    if "|" in line.strip(" |"):
        # "Python | Django | AWS" is a stack line, not a header
        return any(ROLE_KEYWORD_RE.search(s) for s in line.split("|"))
    if " at " in line:
        # "Responsible for data pipelines at scale" is a description line
        title = line.split(" at ", 1)[0]
        first_word = line.split()[0].lower()
        return (
            first_word not in PAST_TENSE_VERBS
            and len(title) <= AT_TITLE_MAX_CHARS
            and bool(ROLE_KEYWORD_RE.search(title))
        )
    return False


@dataclass
class HeaderFields:
    role: str = ""
    company: str = ""
    location: Optional[str] = None


def _assign_pair(left: str, right: str, fields: HeaderFields) -> None:
    """Role goes to whichever side carries a job-title keyword."""
    left_role = bool(ROLE_KEYWORD_RE.search(left))
    right_role = bool(ROLE_KEYWORD_RE.search(right))
    if right_role and not left_role:
        fields.role, fields.company = right, left
    else:
        fields.role, fields.company = left, right


def split_header(text: str) -> HeaderFields:
    """
    Role, company and location from a delimiter line with dates removed.

    Examples:
        "Senior Engineer at Acme Corp" -> role "Senior Engineer", company "Acme Corp"
        "Acme Corp | Backend Developer | Austin, TX" -> role "Backend Developer",
            company "Acme Corp", location "Austin, TX"
        "Acme Corp" -> company "Acme Corp"
    """
    fields = HeaderFields()
    text = _clean(text)
    if not text:
        return fields

    if " at " in text:
        role, company = text.split(" at ", 1)
        segments = [_clean(s) for s in SEGMENT_SPLIT_RE.split(company)]
        company = segments[0]
        for segment in segments[1:]:
            if _is_location(segment):
                fields.location = segment
        m = TRAILING_LOCATION_RE.search(company)
        if m and _is_location(m.group(1)):
            fields.location = fields.location or m.group(1)
            company = company[:m.start()]
        fields.role, fields.company = _clean(role), _clean(company)
        return fields

    segments = [_clean(s) for s in SEGMENT_SPLIT_RE.split(text)]
    segments = [s for s in segments if s]
    named = []
    for segment in segments:
        if fields.location is None and _is_location(segment):
            fields.location = segment
        else:
            named.append(segment)

    if len(named) >= 2:
        _assign_pair(named[0], named[1], fields)
        return fields

    single = named[0] if named else ""
    m = TRAILING_LOCATION_RE.search(single)
    if m and _is_location(m.group(1)):
        fields.location = fields.location or m.group(1)
        single = _clean(single[:m.start()])

    # "Senior Engineer - Acme Corp", "Senior Engineer, Acme Corp"
    parts = [p for p in DASH_SPLIT_RE.split(single, maxsplit=1) if p]
    if len(parts) == 2 and bool(ROLE_KEYWORD_RE.search(parts[0])) != bool(ROLE_KEYWORD_RE.search(parts[1])):
        _assign_pair(_clean(parts[0]), _clean(parts[1]), fields)
    elif ROLE_KEYWORD_RE.search(single):
        fields.role = single
    else:
        fields.company = single
    return fields


# ============================================================================
# State machine
# ============================================================================

class EntryState(Enum):
    NO_ENTRY = "no_entry"
    BUILDING_ENTRY = "building_entry"


@dataclass
class PartialEntry:
    role: str = ""
    company: str = ""
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return bool(self.role and self.company)


class ExperienceStateMachine:
    """Feeds experience-section lines and collects completed entries."""

    def __init__(self) -> None:
        self.state = EntryState.NO_ENTRY
        self.current: Optional[PartialEntry] = None
        self.entries: List[PartialEntry] = []
        self._carry: List[str] = []

    def feed(self, line: str) -> None:
        line = line.strip()
        if not line:
            return
        if is_delimiter(line):
            self._on_delimiter(line)
        else:
            self._on_detail(line)

    def finish(self) -> List[PartialEntry]:
        self._close()
        self.state = EntryState.NO_ENTRY
        return self.entries

    def _close(self) -> None:
        if self.current is None:
            return
        if self.current.complete:
            self.entries.append(self.current)
        else:
            logger.debug(
                f"dropping experience entry without role and company: "
                f"role={self.current.role!r} company={self.current.company!r}"
            )
        self.current = None

    def _on_delimiter(self, line: str) -> None:
        dates = parse_date_range(line)
        header_text = line
        if dates is not None:
            header_text = line[:dates.span[0]] + " " + line[dates.span[1]:]
        fields = split_header(header_text)

        date_only = not fields.role and not fields.company
        if date_only and self.current is not None and self.current.start_date is None:
            # "Senior Engineer at Acme" followed by its dates on the next line
            self._apply_dates(self.current, dates)
            self.current.location = self.current.location or fields.location
            self._carry = []
            return

        self._close()
        entry = PartialEntry(
            role=_recase(fields.role),
            company=_recase(fields.company),
            location=fields.location,
        )
        self._apply_dates(entry, dates)
        self._fill_from_carry(entry)
        self.current = entry
        self.state = EntryState.BUILDING_ENTRY

    def _on_detail(self, line: str) -> None:
        text = strip_bullet(line)
        if self.current is not None and self.current.location is None and not self._carry and _is_location(text):
            self.current.location = text
            return

        if len(text) <= CARRY_MAX_CHARS and not text.endswith(".") and not BULLET_PREFIX_RE.match(line):
            self._carry = (self._carry + [text])[-CARRY_MAX_LINES:]
        else:
            self._carry = []

        if self.state is EntryState.BUILDING_ENTRY and len(text) >= DESCRIPTION_MIN_CHARS:
            self.current.description.append(text)

    def _fill_from_carry(self, entry: PartialEntry) -> None:
        """Take a missing role or company from the short lines just above."""
        carried, self._carry = self._carry, []
        used = []
        for text in reversed(carried):
            parsed = split_header(text)
            if not entry.role and parsed.role:
                entry.role = _recase(parsed.role)
                used.append(text)
            elif not entry.company and parsed.company and not parsed.role:
                entry.company = _recase(parsed.company)
                used.append(text)
            else:
                continue
            entry.location = entry.location or parsed.location

        # Carried lines were description of the previous entry
        if used and self.entries:
            previous = self.entries[-1].description
            while previous and previous[-1] in used:
                previous.pop()

    @staticmethod
    def _apply_dates(entry: PartialEntry, dates: Optional[DateRange]) -> None:
        if dates is None:
            return
        entry.start_date = dates.start
        entry.end_date = None if dates.is_current else dates.end
        entry.is_current = dates.is_current


# ============================================================================
# Public API
# ============================================================================

def parse_experience_lines(lines: Sequence[str], max_entries: int = 10) -> List[Experience]:
    machine = ExperienceStateMachine()
    for line in lines:
        machine.feed(line)

    experiences = []
    for order, entry in enumerate(machine.finish()[:max_entries]):
        description = "\n".join(entry.description)[:DESCRIPTION_MAX_CHARS]
        experiences.append(Experience(
            company=entry.company,
            role=entry.role,
            location=entry.location,
            start_date=entry.start_date,
            end_date=entry.end_date,
            is_current=entry.is_current,
            description=description,
            order=order,
        ))
    return experiences


def extract_experiences(text: str, max_entries: int = 10) -> List[Experience]:
    """
    Work history entries from the experience section, in document order.

    Returns an empty list when the resume has no experience section.
    """
    lines = section_lines(non_empty_lines(text), SectionKind.EXPERIENCE)
    experiences = parse_experience_lines(lines, max_entries=max_entries)
    logger.info(f"experience: {len(experiences)} entries from {len(lines)} lines")
    return experiences
