import logging
from io import BytesIO
from typing import List

from docx import Document

from resume_inference.core.exceptions import UnreadableDocumentError

logger = logging.getLogger(__name__)


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Non-empty paragraph text of a DOCX, one paragraph per line.

    Table rows (contact headers are often laid out in tables) follow the
    body paragraphs, cells joined with " | ".
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as exc:  # python-docx raises zipfile, KeyError and lxml errors
        raise UnreadableDocumentError(f"Failed to read DOCX: {exc.__class__.__name__}") from exc

    lines: List[str] = []
    for p in doc.paragraphs:
        t = (p.text or "").strip()
        if t:
            lines.append(t)

    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                t = (cell.text or "").strip()
                # Merged cells repeat the same object across the row
                if t and t not in cells:
                    cells.append(t)
            if cells:
                lines.append(" | ".join(cells))

    logger.info(f"docx: {len(lines)} lines")
    return "\n".join(lines)
