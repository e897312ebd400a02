import os
import sys
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))


class Settings(BaseSettings):
    # Defaults are a complete local configuration; every value can be
    # overridden with a RESUME_INFERENCE_* environment variable.
    PROJECT_NAME: str = "Resume Inference Service"
    LOG_LEVEL: str = "INFO"

    # Documents yielding fewer characters than this are treated as unreadable
    MIN_TEXT_LENGTH: int = 100
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Output caps
    SUMMARY_MAX_CHARS: int = 500
    MAX_EXPERIENCES: int = 10
    MAX_EDUCATION: int = 5
    MAX_SKILLS: int = 50

    # Below this many section skills, the summary/experience fallbacks run
    SKILL_FALLBACK_THRESHOLD: int = 5

    model_config = SettingsConfigDict(
        env_prefix="RESUME_INFERENCE_",
        env_file=os.path.join(_PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger exactly once.

    * Console only (StreamHandler -> stderr)
    * ISO-8601 timestamps
    * Level from settings unless given explicitly
    * Calling it twice does not add a second handler
    """
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(
        fmt="[%(asctime)s - %(name)s - %(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root.setLevel((level or settings.LOG_LEVEL).upper())
    root.addHandler(handler)

    for noisy in ("pdfminer", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
