"""
Fatal parse failures.

Only conditions that make the whole document unusable are raised. A field or
section that cannot be found is never an error: extractors return None or an
empty list and the confidence score reflects it.
"""

from typing import Optional


class ResumeParseError(Exception):
    """Base class for failures that abort a parse call."""

    status_code: int = 422

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnreadableDocumentError(ResumeParseError):
    """The document binary could not be decoded (corrupt, encrypted, wrong format)."""


class InsufficientTextError(ResumeParseError):
    """The document decoded, but yielded too little text to be a resume."""

    def __init__(self, length: int, minimum: int):
        super().__init__(
            f"Document appears to be empty or unreadable "
            f"({length} characters extracted, at least {minimum} required)"
        )
        self.length = length
        self.minimum = minimum
