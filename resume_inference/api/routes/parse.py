import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from resume_inference.core.config import settings
from resume_inference.core.exceptions import ResumeParseError
from resume_inference.core.resume_parser import DocumentKind, parse_document
from resume_inference.core.schemas import ParseResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def detect_document_kind(filename: str, content_type: str) -> Optional[DocumentKind]:
    """Document kind from the upload's file name, then its content type."""
    filename = filename.lower()
    content_type = content_type.lower()
    if filename.endswith(".pdf") or content_type == "application/pdf":
        return DocumentKind.PDF
    if filename.endswith(".docx") or content_type == DOCX_CONTENT_TYPE:
        return DocumentKind.DOCX
    if filename.endswith((".txt", ".md")) or content_type in TEXT_CONTENT_TYPES:
        return DocumentKind.TEXT
    return None


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume",
    description="Infer a structured resume record from a PDF, DOCX or TXT resume. Every field is optional; the confidence score reflects how much was found.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "personalInfo": {
                            "name": "John Doe",
                            "role": "Senior Backend Engineer",
                            "email": "john.doe@example.com",
                            "phone": "+1 415 555 0100",
                            "location": "San Francisco, CA",
                            "linkedinUrl": "https://linkedin.com/in/johndoe",
                            "portfolioUrl": None,
                        },
                        "summary": {"content": "Backend engineer with 8 years of experience building APIs."},
                        "experiences": [
                            {
                                "company": "Acme Corp",
                                "role": "Senior Backend Engineer",
                                "location": "San Francisco, CA",
                                "startDate": "2020-01",
                                "endDate": None,
                                "isCurrent": True,
                                "description": "Built the payments platform",
                                "order": 0,
                            }
                        ],
                        "education": [],
                        "skills": [{"name": "Python", "category": "Languages", "order": 0}],
                        "confidence": 0.78,
                        "fileName": "john_doe.pdf",
                        "fileSize": 48213,
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File larger than the upload limit"},
        415: {"description": "Unsupported file format"},
        422: {"description": "Document is unreadable or has too little text"},
    },
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX or TXT format)")
):
    """
    Parse a resume file into a structured record.

    **Supported formats:**
    - PDF (.pdf) - text layer only
    - DOCX (.docx)
    - TXT (.txt, .md)
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {len(raw)} bytes (limit {settings.MAX_UPLOAD_BYTES}).",
        )

    kind = detect_document_kind(file.filename or "", file.content_type or "")
    if kind is None:
        raise HTTPException(status_code=415, detail=f"Unsupported content type: {file.content_type}")

    try:
        record = await run_in_threadpool(parse_document, raw, kind)
    except ResumeParseError as exc:
        logger.warning(f"parse failed for {file.filename!r}: {exc.message}")
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    return ParseResponse(
        **record.model_dump(),
        file_name=file.filename or "",
        file_size=len(raw),
    )
