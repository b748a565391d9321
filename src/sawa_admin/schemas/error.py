"""Error response schemas.

All dashboard error responses use the same envelope:
{"error": {"code": "...", "message": "...", "fields": {...}}}.
Exception handlers in main.py construct these from dashboard exceptions.
``fields`` is only present for form validation failures.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Inner error object with a machine-readable code and human-readable message."""

    code: str
    message: str
    fields: dict[str, str] | None = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned by all error responses."""

    error: ErrorDetail
