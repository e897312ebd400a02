import logging
import re
from io import BytesIO
from typing import Any, List, Optional, Tuple

import pdfplumber

from resume_inference.core.exceptions import UnreadableDocumentError

logger = logging.getLogger(__name__)


def _words_to_text(page: Any, *, x_tolerance: float = 3, y_tolerance: float = 2, line_y_tolerance: float = 3) -> str:
    """
    Rebuild page text from word objects.

    Words are grouped into lines by their 'top' coordinate and joined with
    single spaces. Used when the layout text of a page comes out glued.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    lines = []
    current_key = None
    current_words: List[str] = []

    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if current_key is not None and key != current_key:
            lines.append(" ".join(current_words))
            current_words = []
        current_words.append(w["text"])
        current_key = key

    if current_words:
        lines.append(" ".join(current_words))
    return "\n".join(lines)


def _score_text(s: str) -> float:
    """
    Extraction quality penalty (lower is better).

    Alphabetic runs of 18+ characters are glued words; more than ten
    single-letter tokens is letter fragmentation.
    """
    tokens = re.findall(r"[A-Za-z]+", s)
    if not tokens:
        return 1e9
    long_glued = sum(1 for t in tokens if len(t) >= 18)
    excessive_singles = max(0, sum(1 for t in tokens if len(t) == 1) - 10)
    return long_glued * 10 + excessive_singles * 3


def _page_text(page: Any, x_tolerance_range: Tuple[float, ...] = (1.5, 2, 2.5, 3)) -> str:
    text = page.extract_text() or ""
    score = _score_text(text)
    if score == 0:
        return text

    # Glued or fragmented layout text: try word grouping at a few tolerances
    candidates = [(score, 0, text)]
    for i, xt in enumerate(x_tolerance_range, start=1):
        rebuilt = _words_to_text(page, x_tolerance=xt)
        candidates.append((_score_text(rebuilt), i, rebuilt))
    best_score, _, best = min(candidates)
    logger.debug(f"page {page.page_number}: layout score {score}, best {best_score}")
    return best


def extract_pdf_text(pdf_bytes: bytes, password: Optional[str] = None) -> str:
    """
    Text of every page of a PDF, pages separated by a newline.

    Malformed and encrypted documents raise UnreadableDocumentError.
    """
    try:
        with pdfplumber.open(BytesIO(pdf_bytes), password=password or "") as pdf:
            pages = [_page_text(page) for page in pdf.pages]
    except UnreadableDocumentError:
        raise
    except Exception as exc:  # pdfminer raises a wide range of parse errors
        raise UnreadableDocumentError(f"Failed to read PDF: {exc.__class__.__name__}") from exc

    logger.info(f"pdf: {len(pages)} pages, {sum(len(p) for p in pages)} characters")
    return "\n".join(pages)
