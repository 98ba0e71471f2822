# edithub/core/errors.py
from __future__ import annotations

INVALID_CODE = "Invalid access code"
STORE_UNAVAILABLE = "Service temporarily unavailable, please try again"


class EditHubError(Exception):
    """Base for errors the API turns into user-facing messages."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(EditHubError):
    status_code = 400


class StreamableError(EditHubError):
    """The Streamable import was not accepted; nothing was written locally."""

    status_code = 502


class NotFound(EditHubError):
    status_code = 404
