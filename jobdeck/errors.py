"""
JobDeck - Error taxonomy.

Every error leaves the API as a JSON envelope:

    {"error": "<short message>", "details": "<what went wrong>"}
"""
from typing import Optional


class JobDeckError(Exception):
    """Base class for errors rendered as an error envelope."""
    status_code = 500
    default_error = "Internal server error"

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.default_error
        self.details = details or self.error
        super().__init__(self.error)

    def to_dict(self) -> dict:
        return {"error": self.error, "details": self.details}


class ValidationError(JobDeckError):
    """A required request field is missing or malformed."""
    status_code = 400
    default_error = "Invalid request"


class UpstreamError(JobDeckError):
    """The language model call failed or its reply was not JSON."""
    status_code = 500
    default_error = "Upstream model request failed"


class MethodNotAllowed(JobDeckError):
    status_code = 405
    default_error = "Method not allowed"
