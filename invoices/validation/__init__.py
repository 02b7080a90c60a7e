"""
Centralized Validation Module

This module provides entity-specific validation schemas and the error
taxonomy shared by the mutation actions and the transports.
Server is authoritative; templates mirror constraints for UX.

Entities:
- Invoice: customer reference, amount and status
- Customer: name, email and profile image
"""

from .schemas import (
    InvoiceSchema,
    CustomerSchema,
    InvoiceInput,
    CustomerInput,
    SchemaResult,
)
from .errors import (
    AuthError,
    ErrorCode,
    ErrorResponse,
    FieldError,
    PersistenceError,
    RecordNotFound,
    UploadError,
)

__all__ = [
    "InvoiceSchema",
    "CustomerSchema",
    "InvoiceInput",
    "CustomerInput",
    "SchemaResult",
    "AuthError",
    "ErrorCode",
    "ErrorResponse",
    "FieldError",
    "PersistenceError",
    "RecordNotFound",
    "UploadError",
]
