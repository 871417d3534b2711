from __future__ import annotations

from typing import Any


class MemorizationError(Exception):
    """Base exception for the memorization core.

    Raised from service functions; the API layer translates these into
    JSON error responses using ``status_code`` and ``code``.
    """

    status_code: int = 400
    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        self.message = message
        self.code = code if code is not None else self.default_code
        self.status_code = status_code if status_code is not None else self.status_code
        self.details = details
        super().__init__(message)


class ValidationError(MemorizationError):
    """Rejected input; raised before any state is touched."""

    status_code = 400
    default_code = "validation_error"


class NotFoundError(MemorizationError):
    """Verse does not exist or is not owned by the requesting user."""

    status_code = 404
    default_code = "not_found"


class ImmutableReviewError(MemorizationError):
    """Attempt to update or individually delete an appended review."""

    status_code = 409
    default_code = "review_immutable"
