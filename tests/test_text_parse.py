"""End-to-end parsing of plain-text resumes, directly and through the API."""

import pytest
from fastapi.testclient import TestClient

from resume_inference.core.config import settings
from resume_inference.core.exceptions import InsufficientTextError
from resume_inference.core.resume_parser import parse_resume_text
from resume_inference.main import app

client = TestClient(app)

RESUME = """JOHN DOE | Senior Backend Engineer
john.doe@example.com | +1 415 555 0100 | San Francisco, CA
linkedin.com/in/johndoe

SUMMARY
Backend engineer with 8 years of experience building payment systems and APIs.

EXPERIENCE
Senior Backend Engineer at Acme Corp | Jan 2020 - Present
- Led the migration of the billing platform to Kubernetes
Backend Developer | Globex Inc | Austin, TX | 06/2016 - 12/2019
- Built REST APIs in Python and Django for the logistics team

EDUCATION
Bachelor of Science in Computer Science, 2016
University of Texas at Austin

SKILLS
Languages: Python, Go, SQL
Tools: Docker, Kubernetes, Git
"""


def _post(name, content, content_type="text/plain"):
    return client.post("/parse", files={"file": (name, content, content_type)})


class TestParseResumeText:

    def test_personal_info(self):
        info = parse_resume_text(RESUME).personal_info
        assert info.name == "John Doe"
        assert info.role == "Senior Backend Engineer"
        assert info.email == "john.doe@example.com"
        assert "415" in info.phone
        assert info.location == "San Francisco, CA"
        assert info.linkedin_url == "https://linkedin.com/in/johndoe"

    def test_sections(self):
        record = parse_resume_text(RESUME)
        assert record.summary.content.startswith("Backend engineer with 8 years")
        assert [e.company for e in record.experiences] == ["Acme Corp", "Globex Inc"]
        assert record.experiences[0].is_current
        assert record.education[0].institution == "University of Texas at Austin"
        assert [s.name for s in record.skills] == ["Python", "Go", "SQL", "Docker", "Kubernetes", "Git"]
        assert record.skills[0].category == "Languages"

    def test_confidence(self):
        assert 0.7 <= parse_resume_text(RESUME).confidence <= 1.0

    def test_same_text_same_record(self):
        assert parse_resume_text(RESUME) == parse_resume_text(RESUME)

    def test_missing_sections_are_empty_not_errors(self):
        text = "Jane Smith\njane@smith.dev\n" + "Enjoys long walks and quiet afternoons in the garden. " * 3
        record = parse_resume_text(text)
        assert record.personal_info.email == "jane@smith.dev"
        assert record.experiences == []
        assert record.education == []
        assert 0.0 < record.confidence < 0.5

    def test_too_little_text(self):
        with pytest.raises(InsufficientTextError) as excinfo:
            parse_resume_text("Jane Smith\njane@smith.dev")
        assert excinfo.value.status_code == 422


class TestParseEndpoint:

    def test_parse_txt(self):
        r = _post("resume.txt", RESUME.encode())
        assert r.status_code == 200
        data = r.json()
        assert data["personalInfo"]["name"] == "John Doe"
        assert data["personalInfo"]["linkedinUrl"] == "https://linkedin.com/in/johndoe"
        assert data["experiences"][0]["startDate"] == "2020-01"
        assert data["experiences"][0]["isCurrent"] is True
        assert data["experiences"][0]["endDate"] is None
        assert data["fileName"] == "resume.txt"
        assert data["fileSize"] == len(RESUME.encode())
        assert 0.0 <= data["confidence"] <= 1.0

    def test_kind_from_extension_when_content_type_is_generic(self):
        r = _post("resume.md", RESUME.encode(), "application/octet-stream")
        assert r.status_code == 200

    def test_empty_upload(self):
        assert _post("resume.txt", b"").status_code == 400

    def test_upload_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 100)
        assert _post("resume.txt", RESUME.encode()).status_code == 413

    def test_unsupported_format(self):
        assert _post("photo.png", b"\x89PNG\r\n", "image/png").status_code == 415

    def test_short_text_is_unprocessable(self):
        r = _post("resume.txt", b"Jane Smith\njane@smith.dev")
        assert r.status_code == 422
        assert "at least 100 required" in r.json()["detail"]

    def test_malformed_pdf_is_unprocessable(self):
        r = _post("resume.pdf", b"this is not a pdf", "application/pdf")
        assert r.status_code == 422
        assert r.json()["detail"].startswith("Failed to read PDF")


def test_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"service": "resume-inference", "status": "running"}


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
