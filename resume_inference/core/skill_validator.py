"""
Skill candidate validation.

Skills sections bleed: a summary sentence split on commas produces tokens like
"and delivering measurable value to stakeholders". A candidate is accepted
only when it survives the rejection rules below and then the word-count tier
it falls into:

- 1-2 words: accepted if it is known technology, looks like a file/version
  token ("Node.js", "ES2020"), or is short enough to be a term
- 3-4 words: accepted if it contains known technology or starts with a known
  compound prefix ("Amazon Web Services")
- longer: accepted only if it contains known technology
"""

import re
from dataclasses import dataclass
from typing import Pattern

from resume_inference.core.contact_extractors import EMAIL_RE, PHONE_RE
from resume_inference.core.vocabulary import (
    AMBIGUOUS_TECH_WORDS,
    COMPOUND_SKILL_PREFIXES,
    CONNECTIVE_PREFIXES,
    CONNECTIVE_STOPWORDS,
    FILE_EXTENSION_SUFFIX_RE,
    ORGANIZATION_KEYWORD_RE,
    PAST_TENSE_VERBS,
    TECH_VOCABULARY,
    VERSION_NUMBER_RE,
)


@dataclass(frozen=True)
class SkillTiers:
    """Word-count thresholds for the acceptance tiers."""
    lenient_max_words: int = 2
    vocabulary_max_words: int = 4
    short_token_max_length: int = 25
    min_length: int = 2
    max_length: int = 50


DEFAULT_TIERS = SkillTiers()

URL_MARKER_RE = re.compile(r"https?://|www\.|linkedin\.com|github\.com/", re.IGNORECASE)


def _tech_term_pattern() -> Pattern[str]:
    terms = sorted(
        (t for t in TECH_VOCABULARY if t not in AMBIGUOUS_TECH_WORDS and len(t) > 1),
        key=len,
        reverse=True,
    )
    alternation = "|".join(re.escape(t) for t in terms)
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})(?![a-z0-9+#])")


TECH_TERM_RE = _tech_term_pattern()


def has_tech_term(candidate: str) -> bool:
    """Known technology as the whole candidate or as a word inside it."""
    lowered = candidate.lower().strip()
    return lowered in TECH_VOCABULARY or bool(TECH_TERM_RE.search(lowered))


def _is_contact(candidate: str) -> bool:
    if "@" in candidate or URL_MARKER_RE.search(candidate) or EMAIL_RE.search(candidate):
        return True
    return any(sum(c.isdigit() for c in m.group(0)) >= 10 for m in PHONE_RE.finditer(candidate))


def is_valid_skill(candidate: str, tiers: SkillTiers = DEFAULT_TIERS) -> bool:
    """
    Decide whether a token from a skills region is a real skill.

    Examples:
        "React" -> True
        "Node.js" -> True
        "Amazon Web Services" -> True
        "and" -> False
        "and delivering measurable value to stakeholders" -> False
        "Developed REST APIs" -> False
        "Stanford University" -> False
    """
    text = " ".join(candidate.split())
    if not tiers.min_length <= len(text) <= tiers.max_length:
        return False
    if _is_contact(text):
        return False

    lowered = text.lower()
    words = lowered.split()
    if words[0] in CONNECTIVE_PREFIXES or lowered in CONNECTIVE_STOPWORDS:
        return False
    if text[-1] in ".!?" or "—" in text or "–" in text:
        return False
    if ORGANIZATION_KEYWORD_RE.search(text) or words[0] in PAST_TENSE_VERBS:
        return False

    known = has_tech_term(text)
    if len(words) <= tiers.lenient_max_words:
        return (
            known
            or bool(FILE_EXTENSION_SUFFIX_RE.search(text))
            or bool(VERSION_NUMBER_RE.search(text))
            or len(text) <= tiers.short_token_max_length
        )
    if len(words) <= tiers.vocabulary_max_words:
        return known or lowered.startswith(COMPOUND_SKILL_PREFIXES)
    return known
