"""
Standardized Error Handling

Provides consistent error format:
API: { success: false, error: { code, message, details? }, request_id }
UI: inline field errors + a single form-level message

Failure kinds raised below the mutation actions:
- UploadError: profile image could not be written (IOError kind)
- PersistenceError / RecordNotFound: store-level failure (DatabaseError kind)
- AuthError: sign-in failure classified by type

HTTP Status Code Standards:
- 200: Success
- 201: Created
- 400: Bad Request (validation errors, malformed input)
- 401: Unauthorized (not authenticated)
- 403: Forbidden (not permitted)
- 404: Not Found
- 500: Internal Server Error
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from django.http import JsonResponse


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FIELD_REQUIRED = "FIELD_REQUIRED"
    FIELD_INVALID = "FIELD_INVALID"
    FIELD_TOO_SHORT = "FIELD_TOO_SHORT"
    FIELD_OUT_OF_RANGE = "FIELD_OUT_OF_RANGE"
    FIELD_INVALID_FORMAT = "FIELD_INVALID_FORMAT"

    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    STORAGE_ERROR = "STORAGE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class FieldError:
    field: str
    code: str
    message: str


@dataclass
class ErrorDetail:
    code: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass
class ErrorResponse:
    success: bool = False
    error: Optional[ErrorDetail] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error.to_dict() if self.error else None,
            "request_id": self.request_id,
        }

    def to_json_response(self, status: int = 400) -> JsonResponse:
        return JsonResponse(self.to_dict(), status=status)


class UploadError(IOError):
    """The uploaded asset could not be written under the upload root."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class PersistenceError(Exception):
    """A write statement failed at the store level."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


class RecordNotFound(PersistenceError):
    pass


class AuthError(Exception):
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    ACCESS_DENIED = "AccessDenied"
    CONFIGURATION = "Configuration"

    def __init__(self, type: str, message: str = ""):
        self.type = type
        super().__init__(message or type)


def group_field_errors(errors: List[FieldError]) -> Dict[str, List[str]]:
    """Collapse field errors into ``{field: [message, ...]}`` keeping order."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped
