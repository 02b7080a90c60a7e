"""
Error Handling Middleware

Turns exceptions escaping API views into the standard error envelope.
Page requests fall through to Django's own error handling.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse

from .errors import (
    ErrorCode,
    ErrorDetail,
    ErrorResponse,
    PersistenceError,
    RecordNotFound,
    UploadError,
)

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware:
    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exc: Exception) -> Optional[HttpResponse]:
        if not self._is_api_request(request):
            return None
        return self.handle_exception(request, exc)

    def handle_exception(self, request: HttpRequest, exc: Exception) -> JsonResponse:
        request_id = getattr(request, "request_id", None) or str(uuid.uuid4())

        if isinstance(exc, (Http404, RecordNotFound)):
            return self._create_json_error(
                ErrorCode.RESOURCE_NOT_FOUND,
                str(exc) or "Resource not found",
                404,
                request_id,
            )

        if isinstance(exc, PermissionDenied):
            return self._create_json_error(
                ErrorCode.PERMISSION_DENIED,
                str(exc) or "Permission denied",
                403,
                request_id,
            )

        logger.exception(
            f"Unhandled exception [request_id={request_id}]: {exc}",
            extra={"request_id": request_id},
        )

        if isinstance(exc, UploadError):
            code = ErrorCode.STORAGE_ERROR
        elif isinstance(exc, PersistenceError):
            code = ErrorCode.DATABASE_ERROR
        else:
            code = ErrorCode.INTERNAL_ERROR

        message = "An unexpected error occurred. Please try again later."
        if settings.DEBUG:
            message = f"{type(exc).__name__}: {str(exc)}"

        return self._create_json_error(code, message, 500, request_id)

    def _is_api_request(self, request: HttpRequest) -> bool:
        if request.path.startswith("/api/"):
            return True

        accept = request.headers.get("Accept", "")
        if "application/json" in accept:
            return True

        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return True

        return False

    def _create_json_error(
        self,
        code: ErrorCode,
        message: str,
        status: int,
        request_id: str,
    ) -> JsonResponse:
        return ErrorResponse(
            error=ErrorDetail(code=code.value, message=message),
            request_id=request_id,
        ).to_json_response(status)
