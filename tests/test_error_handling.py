import json

import pytest
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework.exceptions import NotAuthenticated, ParseError

from invoices.validation.api_exceptions import custom_exception_handler
from invoices.validation.errors import PersistenceError, RecordNotFound, UploadError
from invoices.validation.middleware import ErrorHandlingMiddleware


@pytest.fixture
def middleware():
    return ErrorHandlingMiddleware(lambda request: None)


def body(response):
    return json.loads(response.content)


class TestErrorHandlingMiddleware:
    def test_page_requests_fall_through(self, rf, middleware):
        request = rf.get("/dashboard/invoices/")
        assert middleware.process_exception(request, Http404("gone")) is None

    def test_api_not_found(self, rf, middleware):
        request = rf.get("/api/v1/x/")
        request.request_id = "req-1"

        response = middleware.process_exception(request, Http404())

        assert response.status_code == 404
        assert body(response) == {
            "success": False,
            "error": {"code": "RESOURCE_NOT_FOUND", "message": "Resource not found"},
            "request_id": "req-1",
        }

    def test_record_not_found(self, rf, middleware):
        response = middleware.process_exception(rf.delete("/api/v1/invoices/x/"), RecordNotFound("no row"))
        assert response.status_code == 404
        assert body(response)["error"]["code"] == "RESOURCE_NOT_FOUND"

    def test_permission_denied(self, rf, middleware):
        response = middleware.process_exception(rf.post("/api/v1/invoices/"), PermissionDenied())
        assert response.status_code == 403
        assert body(response)["error"]["code"] == "PERMISSION_DENIED"

    @pytest.mark.parametrize("exc,code", [
        (UploadError("disk full"), "STORAGE_ERROR"),
        (PersistenceError("refused"), "DATABASE_ERROR"),
        (RuntimeError("boom"), "INTERNAL_ERROR"),
    ])
    def test_unexpected_errors_are_500(self, rf, middleware, exc, code):
        response = middleware.process_exception(rf.get("/api/v1/"), exc)
        assert response.status_code == 500
        assert body(response)["error"]["code"] == code

    def test_json_accept_header_counts_as_api(self, rf, middleware):
        request = rf.get("/dashboard/", HTTP_ACCEPT="application/json")
        assert middleware.process_exception(request, RuntimeError("boom")).status_code == 500


class TestDRFExceptionHandler:
    def test_not_authenticated(self, rf):
        response = custom_exception_handler(NotAuthenticated(), {"request": rf.get("/api/v1/")})
        assert response.data["error"]["code"] == "AUTHENTICATION_REQUIRED"

    def test_malformed_body(self, rf):
        response = custom_exception_handler(ParseError("JSON parse error"), {"request": rf.post("/api/v1/")})
        assert response.status_code == 400
        assert response.data["error"] == {"code": "VALIDATION_ERROR", "message": "JSON parse error"}

    def test_unhandled_exception_passes_through(self, rf):
        assert custom_exception_handler(RuntimeError("boom"), {"request": rf.get("/api/v1/")}) is None
