from typing import Any, Optional

from rest_framework.response import Response

from invoices.actions import ActionResult, Committed, ErrorKind, Failed, Rejected
from invoices.validation.errors import ErrorCode

FAILURE_STATUS = {
    ErrorKind.NOT_FOUND: (ErrorCode.RESOURCE_NOT_FOUND, 404),
    ErrorKind.IO: (ErrorCode.STORAGE_ERROR, 500),
    ErrorKind.DATABASE: (ErrorCode.DATABASE_ERROR, 500),
}


class APIResponse:
    """Standardized API response format."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = "Success",
        status_code: int = 200,
    ) -> Response:
        """Return a successful API response."""
        response_data = {
            "success": True,
            "message": message,
        }
        if data is not None:
            response_data["data"] = data
        return Response(response_data, status=status_code)

    @staticmethod
    def error(
        code: str,
        message: str = "An error occurred",
        details: Optional[Any] = None,
        status_code: int = 400,
    ) -> Response:
        """Return an error API response."""
        response_data = {
            "success": False,
            "error": {
                "code": code,
                "message": message,
            },
        }
        if details:
            response_data["error"]["details"] = details
        return Response(response_data, status=status_code)

    @classmethod
    def from_result(cls, result: ActionResult, success_status: int = 200) -> Response:
        """Map a mutation result onto the envelope."""
        if isinstance(result, Rejected):
            return cls.error(
                ErrorCode.VALIDATION_ERROR.value,
                message=result.message,
                details=result.errors,
                status_code=400,
            )
        if isinstance(result, Failed):
            code, status_code = FAILURE_STATUS[result.kind]
            return cls.error(code.value, message=result.message, status_code=status_code)

        if isinstance(result, Committed):
            data = {"id": result.record_id}
            if result.redirect_to:
                data["redirect_to"] = result.redirect_to
            return cls.success(data=data, message=result.message or "Success", status_code=success_status)

        raise TypeError(f"Unexpected action result: {result!r}")
