from io import BytesIO

import pytest
from docx import Document
from fastapi.testclient import TestClient

from resume_inference.core.docx_extractor import extract_docx_text
from resume_inference.core.exceptions import UnreadableDocumentError
from resume_inference.main import app

client = TestClient(app)

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_bytes(paragraphs, table_rows=()):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, text in enumerate(row):
                table.cell(r, c).text = text
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_extract_paragraphs_and_table_rows():
    data = _docx_bytes(
        ["Jane Doe", "", "Skills: Python, FastAPI"],
        table_rows=[("jane.doe@example.com", "(555) 123-4567")],
    )
    assert extract_docx_text(data).split("\n") == [
        "Jane Doe",
        "Skills: Python, FastAPI",
        "jane.doe@example.com | (555) 123-4567",
    ]


def test_corrupt_docx_raises():
    with pytest.raises(UnreadableDocumentError):
        extract_docx_text(b"PK not really a zip")


def test_parse_docx_extracts_email():
    data = _docx_bytes([
        "Jane Doe",
        "jane.doe@example.com",
        "(555) 123-4567",
        "Backend engineer who has spent six years building internal tooling for support teams.",
        "Skills: Python, FastAPI, SQL",
    ])
    r = client.post("/parse", files={"file": ("resume.docx", data, DOCX_CONTENT_TYPE)})
    assert r.status_code == 200
    data = r.json()

    assert data["personalInfo"]["name"] == "Jane Doe"
    assert data["personalInfo"]["email"] == "jane.doe@example.com"
    assert [s["name"] for s in data["skills"]][:3] == ["Python", "FastAPI", "SQL"]
    assert data["fileName"] == "resume.docx"


def test_corrupt_docx_upload_is_unprocessable():
    r = client.post("/parse", files={"file": ("resume.docx", b"garbage", DOCX_CONTENT_TYPE)})
    assert r.status_code == 422
