"""
Text normalization for raw text pulled out of resume documents.

Line breaks are the only layout signal that survives text extraction, and every
downstream heuristic is line-based, so they are kept intact. Everything else
that extraction leaves behind is cleaned up:
- null bytes and control characters
- zero-width characters and variation selectors
- icon fonts, dingbats and emoji (phone/mail/pin glyphs in contact headers)
- bullet glyphs (replaced by a space so neighbouring words stay apart)
- letter-spaced lines ("E X P E R I E N C E")
- runs of intra-line whitespace
"""

import re
import unicodedata
from typing import List


# ============================================================================
# Character classes
# ============================================================================

# Page breaks, vertical tabs and Unicode line/paragraph separators end a line
LINE_BREAK_CONTROL_RE = re.compile(r"[\x0b\x0c\x1c-\x1e\x85\u2028\u2029]")

# C0/C1 controls, newline excluded (tabs are converted before this runs)
CONTROL_CHARS_RE = re.compile(r"[\x00-\x09\x0b-\x1f\x7f-\x9f]")

ZERO_WIDTH_RE = re.compile(r"[\xad\u200b-\u200f\u2060-\u2064\ufeff]")
VARIATION_SELECTOR_RE = re.compile(r"[\ufe00-\ufe0f\U000e0100-\U000e01ef]")

BULLET_GLYPHS = (
    "\u2022\u25cf\u25aa\u25ab\u25e6\u2023\u2219\u25a0\u25a1\u25ba\u25b6\u25b8"
    "\u25b9\u25c6\u25c7\u25cb\u25c9\u2713\u2714\u2717\u2718\u27a2\u27a3\u27a4"
    "\u2794\u2192\u2043\xb7\u25d8\u2756"
)
BULLET_RE = re.compile(f"[{re.escape(BULLET_GLYPHS)}]")

# Arrows, technical symbols, misc symbols, dingbats, private use (icon fonts),
# emoji and pictographs
SYMBOL_RE = re.compile(
    r"[\u2190-\u21ff\u2300-\u23ff\u2600-\u27bf\u2b00-\u2bff\ue000-\uf8ff"
    r"\U0001f000-\U0001faff\U000f0000-\U000ffffd]"
)

INLINE_SPACE_RE = re.compile(r"[ \xa0\u2000-\u200a\u202f\u205f\u3000]+")

# "J O H N   D O E" -> "JOHN DOE" (at least four spaced single characters)
SPACED_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9@.()\-\+]\s+){3,}[A-Za-z0-9@.()\-\+]$")


def _despace_if_needed(line: str) -> str:
    """
    Undo letter-spacing on lines made only of spaced single characters.

    Two or more spaces are a word boundary; single spaces are removed.
    """
    t = line.strip()
    if not t or not SPACED_CHARS_RE.match(t):
        return line
    parts = re.split(r"\s{2,}", t)
    return " ".join("".join(p.split()) for p in parts if p.strip())


def _normalize_line(line: str) -> str:
    line = _despace_if_needed(line)
    return INLINE_SPACE_RE.sub(" ", line).strip()


# ============================================================================
# Public API
# ============================================================================

def normalize_text(raw: str) -> str:
    """
    Clean raw extracted text while preserving its line structure.

    Deterministic and total: any string (including an empty one) is accepted
    and nothing is raised.

    Examples:
        "John Doe\\t\\t| Engineer" -> "John Doe | Engineer"
        "• Python\\n• React" -> "Python\\nReact"
        "\\u260e +1 555 0100" -> "+1 555 0100"
    """
    if not raw:
        return ""

    # Compatibility forms: ligatures (ﬁ -> fi), full-width letters, NBSP
    text = unicodedata.normalize("NFKC", raw)

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = LINE_BREAK_CONTROL_RE.sub("\n", text)
    text = text.replace("\t", " ")
    text = CONTROL_CHARS_RE.sub("", text)
    text = ZERO_WIDTH_RE.sub("", text)
    text = VARIATION_SELECTOR_RE.sub("", text)
    text = BULLET_RE.sub(" ", text)
    text = SYMBOL_RE.sub("", text)

    lines = [_normalize_line(line) for line in text.split("\n")]
    text = "\n".join(lines)

    # Keep paragraph gaps, drop runs of blank lines
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip("\n")


def non_empty_lines(text: str) -> List[str]:
    """Stripped, non-empty lines of `text` in document order."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def collapse_whitespace(text: str) -> str:
    """Single-space all whitespace, newlines included."""
    return " ".join(text.split())
