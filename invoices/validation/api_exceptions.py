"""
Django REST Framework Exception Handler

Keeps DRF-raised errors (authentication, malformed bodies, 404) in the same
envelope as the mutation results.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from rest_framework.views import exception_handler
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    NotFound,
    ParseError,
)
from rest_framework.response import Response

from .errors import ErrorCode, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    request = context.get("request")
    request_id = getattr(request, "request_id", None) if request else None
    if not request_id:
        request_id = str(uuid.uuid4())

    response = exception_handler(exc, context)

    if response is not None:
        error_response = _convert_to_standard_format(exc, request_id)
        return Response(error_response.to_dict(), status=response.status_code)

    return response


def _convert_to_standard_format(exc: Exception, request_id: str) -> ErrorResponse:
    if isinstance(exc, NotAuthenticated):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.AUTHENTICATION_REQUIRED.value,
                message="Authentication required. Please log in.",
            ),
            request_id=request_id,
        )

    if isinstance(exc, AuthenticationFailed):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.AUTHENTICATION_FAILED.value,
                message=str(exc.detail) if exc.detail else "Authentication failed.",
            ),
            request_id=request_id,
        )

    if isinstance(exc, PermissionDenied):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.PERMISSION_DENIED.value,
                message=str(exc.detail) if exc.detail else "You do not have permission to perform this action.",
            ),
            request_id=request_id,
        )

    if isinstance(exc, NotFound):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.RESOURCE_NOT_FOUND.value,
                message=str(exc.detail) if exc.detail else "Resource not found.",
            ),
            request_id=request_id,
        )

    if isinstance(exc, ParseError):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=str(exc.detail) or "Malformed request body.",
            ),
            request_id=request_id,
        )

    if isinstance(exc, APIException):
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.INTERNAL_ERROR.value,
                message=str(exc.detail) if exc.detail else "An error occurred.",
            ),
            request_id=request_id,
        )

    return ErrorResponse(
        error=ErrorDetail(
            code=ErrorCode.INTERNAL_ERROR.value,
            message="An unexpected error occurred.",
        ),
        request_id=request_id,
    )
