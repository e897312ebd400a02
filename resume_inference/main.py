from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_inference.api.routes.parse import router as parse_router
from resume_inference.core.config import settings, setup_logging

VERSION = "0.1.0"

setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Deterministic resume inference service that turns PDF/DOCX/TXT resumes into structured records with a confidence score",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)


@app.get("/", tags=["health"])
def root():
    return {"service": "resume-inference", "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Inference API",
        version=VERSION,
        description="Rule-based resume parsing: contact details, experience, education and skills",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
