"""
Skills extraction.

The skills section is read line by line:
- "Frontend:" on its own line (under 50 characters) starts a category
- "Languages: Python, Go" is a category with its skills inline
- other lines are split on , | ; bullets and spaced hyphens/slashes

Every token goes through the skill validator. A long prose line without
commas ends the section early: it is a summary paragraph that lost its header.

When the section yields fewer than five skills, known technology names are
also picked up from the summary and the first lines of the experience
section.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from resume_inference.core.schemas import Skill
from resume_inference.core.section_segmenter import (
    SectionKind,
    detect_section_header,
    section_lines,
)
from resume_inference.core.skill_validator import DEFAULT_TIERS, SkillTiers, is_valid_skill
from resume_inference.core.text_normalization import non_empty_lines
from resume_inference.core.vocabulary import (
    CASE_SENSITIVE_TERMS,
    FALLBACK_TECH_TERMS,
    SENTENCE_CONNECTIVES,
)

logger = logging.getLogger(__name__)


DEFAULT_CATEGORY = "General"
CATEGORY_MAX_CHARS = 50
PROSE_LINE_MIN_CHARS = 80
PROSE_MIN_CONNECTIVES = 2
EXPERIENCE_FALLBACK_LINES = 50

TOKEN_SPLIT_RE = re.compile(r"\s*[,|;]\s*|\s+[-–—/]\s+|\s+[•·]\s+")
INLINE_CATEGORY_RE = re.compile(r"^(?P<category>[A-Za-z][\w &/+#.\-]{0,40}?)\s*:\s*(?P<skills>\S.*)$")
LEADING_MARKER_RE = re.compile(r"^[-*+>•·]\s*")


def is_prose_line(line: str) -> bool:
    """Long sentence-like line: no commas and several connective words."""
    if len(line) <= PROSE_LINE_MIN_CHARS or "," in line:
        return False
    words = re.findall(r"[a-z]+", line.lower())
    return sum(1 for w in words if w in SENTENCE_CONNECTIVES) >= PROSE_MIN_CONNECTIVES


def split_tokens(line: str) -> List[str]:
    """
    Split a skills line into candidate tokens.

    Hyphens and slashes only split when spaced, so "scikit-learn" and "CI/CD"
    stay whole.

    Examples:
        "Python, Go | Rust; SQL" -> ["Python", "Go", "Rust", "SQL"]
        "React - Redux / Jest" -> ["React", "Redux", "Jest"]
    """
    tokens = []
    for token in TOKEN_SPLIT_RE.split(line):
        token = LEADING_MARKER_RE.sub("", token.strip()).strip(" .")
        if token:
            tokens.append(token)
    return tokens


class SkillCollector:
    """Ordered, case-insensitively de-duplicated skill list with a cap."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.items: List[Tuple[str, str]] = []
        self._seen = set()

    @property
    def full(self) -> bool:
        return len(self.items) >= self.limit

    def add(self, name: str, category: str) -> None:
        key = name.lower()
        if self.full or key in self._seen:
            return
        self._seen.add(key)
        self.items.append((name, category))

    def skills(self) -> List[Skill]:
        return [
            Skill(name=name, category=category, order=order)
            for order, (name, category) in enumerate(self.items)
        ]


def collect_section_skills(
    lines: Sequence[str],
    collector: SkillCollector,
    tiers: SkillTiers = DEFAULT_TIERS,
) -> None:
    category = DEFAULT_CATEGORY
    for line in lines:
        line = line.strip()
        if is_prose_line(line):
            logger.debug(f"skills: prose line ends section: {line[:40]!r}")
            break

        # A repeated "Skills" header is not a skill
        if detect_section_header(line) is SectionKind.SKILLS and ":" not in line:
            continue

        if line.endswith(":") and len(line) < CATEGORY_MAX_CHARS:
            category = line[:-1].strip() or DEFAULT_CATEGORY
            continue

        m = INLINE_CATEGORY_RE.match(line)
        if m:
            category = m.group("category").strip()
            line = m.group("skills")

        for token in split_tokens(line):
            if is_valid_skill(token, tiers):
                collector.add(token, category)
            else:
                logger.debug(f"skills: rejected {token!r}")


def _term_pattern(term: str) -> re.Pattern:
    flags = 0 if term in CASE_SENSITIVE_TERMS else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9.]){re.escape(term)}(?![A-Za-z0-9+#])", flags)


_FALLBACK_PATTERNS = [(term, _term_pattern(term)) for term in FALLBACK_TECH_TERMS]


def find_tech_terms(text: str, terms: Iterable[Tuple[str, re.Pattern]] = _FALLBACK_PATTERNS) -> List[str]:
    """Known technology names mentioned in prose, in order of first mention."""
    hits = []
    for term, pattern in terms:
        m = pattern.search(text)
        if m:
            hits.append((m.start(), term))
    return [term for _, term in sorted(hits)]


def extract_skills(
    text: str,
    summary: Optional[str] = None,
    max_skills: int = 50,
    fallback_threshold: int = 5,
    tiers: SkillTiers = DEFAULT_TIERS,
) -> List[Skill]:
    """
    Skills from the skills section, topped up from prose when thin.

    Names are unique case-insensitively; at most `max_skills` are returned,
    ordered as found.
    """
    lines = non_empty_lines(text)
    collector = SkillCollector(max_skills)
    collect_section_skills(section_lines(lines, SectionKind.SKILLS), collector, tiers)
    from_section = len(collector.items)

    if from_section < fallback_threshold:
        if summary:
            for term in find_tech_terms(summary):
                collector.add(term, DEFAULT_CATEGORY)
        experience = section_lines(lines, SectionKind.EXPERIENCE)[:EXPERIENCE_FALLBACK_LINES]
        for term in find_tech_terms("\n".join(experience)):
            collector.add(term, DEFAULT_CATEGORY)

    logger.info(f"skills: {from_section} from section, {len(collector.items)} total")
    return collector.skills()
