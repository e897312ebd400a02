"""
Contact field extraction: email, phone, LinkedIn and portfolio URLs.

Each field is a strategy cascade over the normalized resume text. Strategies
return a raw candidate or None; the cascade repairs the candidate and checks it
against a strict grammar, so a garbled match never reaches the record.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_inference.core.cascade import run_cascade
from resume_inference.core.section_segmenter import SectionKind, detect_section_header, section_lines
from resume_inference.core.text_normalization import collapse_whitespace, non_empty_lines
from resume_inference.core.vocabulary import (
    DOMAIN_SHAPED_TECH_NAMES,
    NON_PORTFOLIO_DOMAINS,
    PERSONAL_SITE_PATTERNS,
    TECH_VOCABULARY,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Email
# ============================================================================

EMAIL_STRICT_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# Dotted domain first; a comma/semicolon before the TLD only when there is no dot
EMAIL_LOOSE_RE = re.compile(
    r"[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}|[,;][A-Za-z]{2,})"
)
EMAIL_COMMA_TLD_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+[,;]\s?[A-Za-z]{2,}\b")

# Whitespace allowed around '@' and '.', e.g. wrapped across lines
EMAIL_FLEX_RE = re.compile(
    r"[A-Za-z0-9._%+-]+(?:(?<=[._-])[ \t]*\n[ \t]*[A-Za-z0-9._%+-]+)?\s*@\s*[A-Za-z0-9-]+(?:\s*\.\s*[A-Za-z0-9-]+)*\s*\.\s*[A-Za-z]{2,}"
)

EMAIL_LABEL_RE = re.compile(r"^\s*e-?mail(?:\s+address)?\s*[:\-]\s*(\S.*)$", re.IGNORECASE | re.MULTILINE)

# Contact lines separated by pipes, or by a capital I when the pipe was misread
CONTACT_SEPARATOR_RE = re.compile(r"\s*\|\s*|\s+I\s+")

# Phone digits glued in front of the local part ("3114timaz.dev@...")
LEADING_PHONE_DIGITS_RE = re.compile(r"^\+?[\d\-.()]*\d(?=[A-Za-z])")

EMAIL_WINDOW_BEFORE = 30
EMAIL_WINDOW_AFTER = 40


def _email_from_label(text: str) -> Optional[str]:
    m = EMAIL_LABEL_RE.search(text)
    if not m:
        return None
    value = re.sub(r"\s+", "", m.group(1))
    found = EMAIL_LOOSE_RE.search(value)
    return found.group(0) if found else None


def _email_from_contact_line(text: str) -> Optional[str]:
    for line in text.split("\n"):
        if "@" not in line or not ("|" in line or " I " in line):
            continue
        for segment in CONTACT_SEPARATOR_RE.split(line):
            if "@" not in segment:
                continue
            found = EMAIL_LOOSE_RE.search(re.sub(r"\s+", "", segment))
            if found:
                return found.group(0)
    return None


def _email_standard(text: str) -> Optional[str]:
    m = EMAIL_RE.search(text)
    if not m:
        return None
    # "john.\ndoe@x.com" is a wrapped address; leave it to the flexible pattern
    before = text[:m.start()].rstrip()
    if before and before[-1] in "._-" and before != text[:m.start()]:
        return None
    return m.group(0)


def _email_flexible(text: str) -> Optional[str]:
    m = EMAIL_FLEX_RE.search(text)
    if not m:
        return None
    return re.sub(r"\s+", "", m.group(0))


def _email_comma_tld(text: str) -> Optional[str]:
    m = EMAIL_COMMA_TLD_RE.search(text)
    return m.group(0) if m else None


def _email_around_at(text: str) -> Optional[str]:
    """Last resort: scan a fixed window around each '@'."""
    for m in re.finditer("@", text):
        start = max(0, m.start() - EMAIL_WINDOW_BEFORE)
        window = text[start:m.start() + EMAIL_WINDOW_AFTER]
        # The window may begin mid-word; only the token touching '@' matters
        squeezed = re.sub(r"\s*@\s*", "@", window)
        squeezed = re.sub(r"\s*([.,;])\s*", r"\1", squeezed)
        found = EMAIL_LOOSE_RE.search(squeezed)
        if found:
            return found.group(0)
    return None


EMAIL_STRATEGIES = (
    _email_from_label,
    _email_from_contact_line,
    _email_standard,
    _email_flexible,
    _email_comma_tld,
    _email_around_at,
)


def decontaminate_email(candidate: str) -> str:
    """
    Remove characters that belong to neighbouring fields and repair
    extraction damage.

    Examples:
        "3114timaz.dev@gmail.com" -> "timaz.dev@gmail.com"
        "+1-555-019-3114timaz.dev@gmail.com" -> "timaz.dev@gmail.com"
        "timaz.dev@gmail,com" -> "timaz.dev@gmail.com"
        "(john@Example.COM)." -> "john@example.com"
    """
    value = re.sub(r"\s+", "", candidate)
    value = value.strip("()<>[]{}\"':,;")
    if "@" not in value:
        return value

    local, domain = value.split("@", 1)

    m = LEADING_PHONE_DIGITS_RE.match(local)
    if m and sum(c.isdigit() for c in m.group(0)) >= 4:
        local = local[m.end():]
    local = local.lstrip("+.-")

    domain = domain.rstrip(".,;:)>]")
    domain = re.sub(r"[,;]([A-Za-z]{2,})$", r".\1", domain)

    return f"{local}@{domain.lower()}"


def is_valid_email(value: str) -> bool:
    if not EMAIL_STRICT_RE.match(value):
        return False
    local = value.split("@", 1)[0]
    return not (local.startswith(".") or local.endswith(".") or ".." in value)


def extract_email(text: str) -> Optional[str]:
    """Best email address in `text`, or None."""
    return run_cascade(
        text,
        EMAIL_STRATEGIES,
        validate=is_valid_email,
        transform=decontaminate_email,
        field="email",
    )


# ============================================================================
# Phone
# ============================================================================

# Optional country code, optional parenthesized area code, space/dot/hyphen separators
PHONE_RE = re.compile(
    r"(?<![\w])"
    r"(?:\+?\d{1,3}[\s.-]?)?"
    r"(?:\(\d{2,4}\)|\d{2,4})"
    r"[\s.-]?\d{3}"
    r"[\s.-]?\d{3,4}"
    r"(?!\d)"
)

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15


def extract_phone(text: str) -> Optional[str]:
    """First phone number with a plausible digit count, or None."""
    for m in PHONE_RE.finditer(text):
        candidate = m.group(0).strip()
        digits = sum(c.isdigit() for c in candidate)
        if PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS:
            logger.debug(f"phone -> {candidate!r}")
            return candidate
    return None


# ============================================================================
# URLs
# ============================================================================

TRAILING_URL_PUNCT = ".,;:)]>}\"'/"

# Lines broken inside a URL: "johndoe.\nvercel.app", "linkedin.com/in/\njohn"
URL_WRAP_RE = re.compile(r"(?<=[./_@:-])[ \t]*\n[ \t]*(?=[A-Za-z0-9])|[ \t]*\n[ \t]*(?=[./])")

KNOWN_TLDS = frozenset({
    "com", "org", "net", "io", "dev", "me", "app", "co", "ai", "tech", "site",
    "xyz", "info", "biz", "us", "uk", "ca", "de", "in", "page", "codes", "sh",
    "so", "design", "blog", "cloud", "online", "website", "space", "studio",
    "pro", "eu", "fr", "au", "nl",
})

URL_CANDIDATE_RE = re.compile(
    r"(?<![@\w.])"
    r"(?:https?://)?"
    r"(?:www\.)?"
    r"((?:[A-Za-z0-9-]+\.)+([A-Za-z]{2,}))"
    # host ends at a boundary, so an email local part ("jdoe.dev@") never matches
    r"(?![\w@-])(?!\.\w)"
    r"(/[^\s|,;()<>]*)?",
    re.IGNORECASE,
)


def finalize_url(url: str) -> str:
    """
    Add a scheme if missing and strip trailing punctuation and slashes.

    Examples:
        "linkedin.com/in/jdoe/" -> "https://linkedin.com/in/jdoe"
        "http://jdoe.dev." -> "http://jdoe.dev"
    """
    url = re.sub(r"\s+", "", url).rstrip(TRAILING_URL_PUNCT)
    if not re.match(r"^https?://", url, re.IGNORECASE):
        url = "https://" + url
    return url


def _dewrap(text: str) -> str:
    return URL_WRAP_RE.sub("", text)


# ----- LinkedIn -----

LINKEDIN_LABEL_RE = re.compile(
    r"^\s*linked\s*-?\s*in(?:\s+(?:profile|url))?\s*[:\-]\s*(\S.*)$",
    re.IGNORECASE | re.MULTILINE,
)
LINKEDIN_RE = re.compile(
    r"(?:https?://)?(?:www\.)?linkedin\.com/(?:in|pub)/[A-Za-z0-9_%-]+",
    re.IGNORECASE,
)
# Domain token with whitespace tolerated inside it and one wrapped continuation
# of the handle (after a trailing '-'/'_' or when the fragment sits on its own line)
LINKEDIN_WRAPPED_RE = re.compile(
    r"(?:https?\s*:\s*/\s*/\s*)?(?:www\s*\.\s*)?"
    r"linked\s*in\s*\.\s*com\s*/\s*(?:in|pub)\s*/\s*"
    r"[A-Za-z0-9_%-]+"
    r"(?:(?<=[-_])[ \t]*\n[ \t]*[A-Za-z0-9_%-]+"
    r"|[ \t]*\n[ \t]*[a-z0-9_%-]+(?=[ \t]*(?:\n|$)))?",
    re.IGNORECASE | re.MULTILINE,
)
LINKEDIN_VALID_RE = re.compile(
    r"^https?://(?:[\w-]+\.)?linkedin\.com/(?:in|pub)/[A-Za-z0-9_%-]+$",
    re.IGNORECASE,
)
HANDLE_RE = re.compile(r"^@?([A-Za-z0-9_-]{3,100})$")


def _linkedin_from_label(text: str) -> Optional[str]:
    m = LINKEDIN_LABEL_RE.search(text)
    if not m:
        return None
    value = re.sub(r"\s+", "", m.group(1))
    found = LINKEDIN_RE.search(value)
    if found:
        return found.group(0)
    path = re.match(r"^/?(?:in|pub)/([A-Za-z0-9_%-]+)", value, re.IGNORECASE)
    if path:
        return f"linkedin.com/in/{path.group(1)}"
    handle = HANDLE_RE.match(value.split("|")[0])
    if handle:
        return f"linkedin.com/in/{handle.group(1)}"
    return None


def _linkedin_reconstructed(text: str) -> Optional[str]:
    m = LINKEDIN_WRAPPED_RE.search(text)
    return re.sub(r"\s+", "", m.group(0)) if m else None


def _linkedin_standard(text: str) -> Optional[str]:
    m = LINKEDIN_RE.search(collapse_whitespace(text))
    return m.group(0) if m else None


LINKEDIN_STRATEGIES = (
    _linkedin_from_label,
    _linkedin_reconstructed,
    _linkedin_standard,
)


def extract_linkedin_url(text: str) -> Optional[str]:
    """LinkedIn profile URL with scheme, or None."""
    return run_cascade(
        text,
        LINKEDIN_STRATEGIES,
        validate=lambda url: bool(LINKEDIN_VALID_RE.match(url)),
        transform=finalize_url,
        field="linkedin",
    )


# ----- Portfolio -----

PORTFOLIO_LABEL_RE = re.compile(
    r"^\s*(?:portfolio|website|web\s*site|web|site|personal\s+site|homepage|blog)\s*[:\-]\s*(\S.*)$",
    re.IGNORECASE | re.MULTILINE,
)
PORTFOLIO_VALID_RE = re.compile(r"^https?://[^\s/]+\.[A-Za-z]{2,}(?:/\S*)?$", re.IGNORECASE)


def _email_domains(text: str) -> set:
    return {m.group(0).split("@", 1)[1].lower() for m in EMAIL_RE.finditer(text)}


def _portfolio_rank(host: str) -> int:
    """Lower is better: hosted personal sites, personal TLDs, then generic domains."""
    for rank, pattern in enumerate(PERSONAL_SITE_PATTERNS):
        if pattern.search(host):
            return rank
    return 2


def _portfolio_candidates(
    text: str,
    exclude: set,
    require_scheme: bool = False,
) -> List[Tuple[int, int, str]]:
    """
    (rank, position, url) for every plausible portfolio URL in `text`.

    With `require_scheme`, only URLs written with "http(s)://" or "www." count.
    """
    candidates = []
    for m in URL_CANDIDATE_RE.finditer(text):
        full = m.group(0)
        host = m.group(1).lower()
        tld = m.group(2).lower()
        has_scheme = bool(re.match(r"^(?:https?://|www\.)", full, re.IGNORECASE))
        bare_host = host[4:] if host.startswith("www.") else host

        if require_scheme and not has_scheme:
            continue
        if tld not in KNOWN_TLDS and not has_scheme:
            continue
        # File names and framework names shaped like domains (Node.js, ASP.NET)
        if bare_host in TECH_VOCABULARY or bare_host in DOMAIN_SHAPED_TECH_NAMES:
            continue
        if any(bare_host == d or bare_host.endswith("." + d) for d in NON_PORTFOLIO_DOMAINS):
            continue
        if bare_host in exclude:
            continue
        candidates.append((_portfolio_rank(bare_host), m.start(), full))
    return candidates


def _best_portfolio(text: str, exclude: set, require_scheme: bool = False) -> Optional[str]:
    candidates = _portfolio_candidates(text, exclude, require_scheme)
    if not candidates:
        return None
    candidates.sort()
    return candidates[0][2]


def _portfolio_from_label(text: str) -> Optional[str]:
    m = PORTFOLIO_LABEL_RE.search(text)
    if not m:
        return None
    value = re.sub(r"\s+", "", m.group(1))
    return _best_portfolio(value, _email_domains(text))


# Skills and experience lines name libraries and employers ("Socket.io",
# "Acme.io"); a bare domain there is not the candidate's site
WORK_SECTIONS = (SectionKind.SKILLS, SectionKind.EXPERIENCE)


def _split_work_sections(text: str) -> Tuple[str, str]:
    """(text outside skills/experience sections, text inside them)."""
    lines = non_empty_lines(text)
    work_lines = set()
    for kind in WORK_SECTIONS:
        work_lines.update(section_lines(lines, kind))
    kept, removed = [], []
    for line in lines:
        if line in work_lines or detect_section_header(line) in WORK_SECTIONS:
            removed.append(line)
        else:
            kept.append(line)
    return "\n".join(kept), "\n".join(removed)


def _portfolio_outside_work(text: str, prepare) -> Optional[str]:
    exclude = _email_domains(text)
    kept, removed = _split_work_sections(text)
    return (
        _best_portfolio(prepare(kept), exclude)
        or _best_portfolio(prepare(removed), exclude, require_scheme=True)
    )


def _portfolio_reconstructed(text: str) -> Optional[str]:
    return _portfolio_outside_work(text, _dewrap)


def _portfolio_standard(text: str) -> Optional[str]:
    return _portfolio_outside_work(text, collapse_whitespace)


PORTFOLIO_STRATEGIES = (
    _portfolio_from_label,
    _portfolio_reconstructed,
    _portfolio_standard,
)


def extract_portfolio_url(text: str) -> Optional[str]:
    """Personal website / portfolio URL with scheme, or None."""
    return run_cascade(
        text,
        PORTFOLIO_STRATEGIES,
        validate=lambda url: bool(PORTFOLIO_VALID_RE.match(url)),
        transform=finalize_url,
        field="portfolio",
    )
