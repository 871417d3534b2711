from __future__ import annotations

from typing import Any

import structlog
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from ..errors import MemorizationError

logger = structlog.get_logger()


def _error_payload(
    *,
    error: str,
    type_: str,
    code: str | None = None,
    details: Any | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": error, "code": code, "type": type_}
    if details is not None:
        payload["details"] = details
    return payload


def exception_handler(exc, context):
    """REST_FRAMEWORK["EXCEPTION_HANDLER"]: one JSON error shape for everything."""
    if isinstance(exc, MemorizationError):
        return Response(
            _error_payload(
                error=exc.message,
                code=exc.code,
                type_=exc.__class__.__name__,
                details=exc.details,
            ),
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("unhandled_exception", error=str(exc))
        return Response(
            _error_payload(
                error="Internal server error",
                code="internal_error",
                type_="InternalServerError",
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.NotAuthenticated):
        # SessionAuthentication has no challenge header, DRF would answer 403
        response.status_code = status.HTTP_401_UNAUTHORIZED
        response.data = _error_payload(
            error="User not authenticated",
            code="not_authenticated",
            type_=exc.__class__.__name__,
        )
    elif isinstance(exc, exceptions.ValidationError):
        response.data = _error_payload(
            error="Validation error",
            code="validation_error",
            type_=exc.__class__.__name__,
            details=exc.detail,
        )
    else:
        detail = getattr(exc, "detail", None)
        response.data = _error_payload(
            error=str(detail) if isinstance(detail, str) else "Request failed",
            code=getattr(detail, "code", None) or "http_exception",
            type_=exc.__class__.__name__,
        )
    return response
