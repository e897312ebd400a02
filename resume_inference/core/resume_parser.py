"""
Resume parsing orchestrator.

Normalizes the extracted text once, runs every field and section extractor
over it, and assembles the immutable record with its confidence score. The
extractors are independent of each other; the only shared input is the
normalized text (and the summary, which the skills fallback scans).
"""

import logging
from enum import Enum

from resume_inference.core.confidence_calculator import ConfidenceCalculator
from resume_inference.core.config import Settings, settings
from resume_inference.core.contact_extractors import (
    extract_email,
    extract_linkedin_url,
    extract_phone,
    extract_portfolio_url,
)
from resume_inference.core.docx_extractor import extract_docx_text
from resume_inference.core.education_parser import extract_education
from resume_inference.core.exceptions import InsufficientTextError
from resume_inference.core.experience_parser import extract_experiences
from resume_inference.core.identity_extractors import extract_location, extract_name, extract_role
from resume_inference.core.pdf_extractor import extract_pdf_text
from resume_inference.core.schemas import ParsedResumeRecord, PersonalInfo, Summary
from resume_inference.core.section_segmenter import extract_summary
from resume_inference.core.skills_parser import extract_skills
from resume_inference.core.text_normalization import normalize_text

logger = logging.getLogger(__name__)


class DocumentKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"


def parse_resume_text(text: str, settings: Settings = settings) -> ParsedResumeRecord:
    """
    Turn extracted resume text into a ParsedResumeRecord.

    Deterministic: the same text always yields an equal record. Missing
    fields and sections are None / empty lists, never errors; the only
    failure is text too short to be a resume (InsufficientTextError).
    """
    length = len((text or "").strip())
    if length < settings.MIN_TEXT_LENGTH:
        raise InsufficientTextError(length, settings.MIN_TEXT_LENGTH)

    normalized = normalize_text(text)

    personal_info = PersonalInfo(
        name=extract_name(normalized),
        role=extract_role(normalized),
        email=extract_email(normalized),
        phone=extract_phone(normalized),
        location=extract_location(normalized),
        linkedin_url=extract_linkedin_url(normalized),
        portfolio_url=extract_portfolio_url(normalized),
    )
    if not personal_info.has_any():
        personal_info = None

    summary_text = extract_summary(normalized, max_chars=settings.SUMMARY_MAX_CHARS)
    summary = Summary(content=summary_text) if summary_text else None

    experiences = extract_experiences(normalized, max_entries=settings.MAX_EXPERIENCES)
    education = extract_education(normalized, max_entries=settings.MAX_EDUCATION)
    skills = extract_skills(
        normalized,
        summary=summary_text,
        max_skills=settings.MAX_SKILLS,
        fallback_threshold=settings.SKILL_FALLBACK_THRESHOLD,
    )

    parts = dict(
        personal_info=personal_info,
        summary=summary,
        experiences=experiences,
        education=education,
        skills=skills,
    )
    confidence = ConfidenceCalculator.overall(**parts)
    logger.debug(f"confidence breakdown: {ConfidenceCalculator.breakdown(**parts)}")
    logger.info(
        f"parsed resume: {len(experiences)} experiences, {len(education)} education, "
        f"{len(skills)} skills, confidence {confidence}"
    )
    return ParsedResumeRecord(confidence=confidence, **parts)


def extract_document_text(data: bytes, kind: DocumentKind) -> str:
    """Raw text of an uploaded document."""
    if kind is DocumentKind.PDF:
        return extract_pdf_text(data)
    if kind is DocumentKind.DOCX:
        return extract_docx_text(data)
    return data.decode("utf-8", errors="replace")


def parse_document(data: bytes, kind: DocumentKind, settings: Settings = settings) -> ParsedResumeRecord:
    """Extract the text of a PDF, DOCX or plain-text document and parse it."""
    text = extract_document_text(data, kind)
    logger.info(f"{kind.value}: extracted {len(text)} characters from {len(data)} bytes")
    return parse_resume_text(text, settings=settings)
