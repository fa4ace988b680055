"""Custom exception classes for the feedback API."""

from typing import List, Optional


class FeedbackAppError(Exception):
    """Base exception for the feedback API."""

    status_code = 500

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(FeedbackAppError):
    """Raised when a requested resource is not found."""

    status_code = 404


class ValidationError(FeedbackAppError):
    """Raised when an inbound payload fails validation.

    Carries one human-readable message per violated rule.
    """

    status_code = 400

    def __init__(self, errors: Optional[List[str]] = None, message: str = "Validation error"):
        self.errors = list(errors or [])
        super().__init__(message)


class InternalError(FeedbackAppError):
    """Raised for unexpected faults; never shown to the caller in detail."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


def error_body(exc: FeedbackAppError) -> dict:
    """Build the JSON envelope returned to the client for an application error."""
    body = {"success": False, "message": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    return body
