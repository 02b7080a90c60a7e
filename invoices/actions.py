"""
Mutation actions for invoices and customers.

Each create/update action is a strict pipeline:
extract fields -> validate -> derive stored values -> (write upload) ->
write row -> invalidate listing cache -> Committed(redirect_to).

Actions are plain functions taking the prior form state and the raw
submission. They never raise: every failure comes back as a result object and
the transport (HTML view, API view, management command) decides what to do
with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .audit import StructuredLogger
from .cache import CUSTOMERS_ROUTE, INVOICES_ROUTE, ListingCache, get_listing_cache
from .gateway import PersistenceGateway, get_gateway
from .uploads import FileIntake, get_file_intake
from .utils import CurrencyHelper, DateHelper
from .validation import CustomerSchema, InvoiceSchema
from .validation.errors import PersistenceError, RecordNotFound, UploadError

logger = StructuredLogger(__name__)

INVOICE_FIELDS = ("customerId", "amount", "status")
CUSTOMER_FIELDS = ("name", "email", "image_url")


class ErrorKind(str, Enum):
    IO = "io"
    DATABASE = "database"
    NOT_FOUND = "not_found"


@dataclass
class ActionState:
    """Form state kept by the caller between attempts."""

    message: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class Rejected:
    errors: Dict[str, List[str]]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors, "message": self.message}

    def to_state(self) -> ActionState:
        return ActionState(message=self.message, errors=dict(self.errors))


@dataclass(frozen=True)
class Failed:
    message: str
    kind: ErrorKind = ErrorKind.DATABASE

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}

    def to_state(self) -> ActionState:
        return ActionState(message=self.message)


@dataclass(frozen=True)
class Committed:
    redirect_to: Optional[str] = None
    message: Optional[str] = None
    record_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"message": self.message}
        if self.redirect_to:
            result["redirect_to"] = self.redirect_to
        return result


ActionResult = Union[Rejected, Failed, Committed]


def _extract(submission: Mapping[str, Any], names) -> Dict[str, Any]:
    return {name: submission.get(name) for name in names}


def _invalidate_invoice_listings(listing_cache: ListingCache) -> None:
    # Customer rows carry invoice totals, so both listings go stale.
    listing_cache.invalidate(INVOICES_ROUTE)
    listing_cache.invalidate(CUSTOMERS_ROUTE)


def _failure_kind(exc: Exception) -> ErrorKind:
    if isinstance(exc, UploadError):
        return ErrorKind.IO
    if isinstance(exc, RecordNotFound):
        return ErrorKind.NOT_FOUND
    return ErrorKind.DATABASE


def create_invoice(
    prior_state: Optional[ActionState],
    submission: Mapping[str, Any],
    *,
    gateway: Optional[PersistenceGateway] = None,
    listing_cache: Optional[ListingCache] = None,
) -> ActionResult:
    result = InvoiceSchema.validate(_extract(submission, INVOICE_FIELDS))
    if not result.success:
        return Rejected(errors=result.errors, message="Missing fields. Failed to create invoice")

    data = result.data
    amount_in_cents = CurrencyHelper.to_minor_units(data.amount)
    created = DateHelper.today()

    gateway = gateway or get_gateway()
    try:
        invoice_id = gateway.insert_invoice(data.customer_id, amount_in_cents, data.status, created)
    except PersistenceError as exc:
        logger.error("Database Error: failed to create invoice", exception=exc, action="create_invoice")
        return Failed("Database Error: Failed to create invoice", kind=_failure_kind(exc))

    logger.audit("invoice.created", resource=invoice_id, amount=amount_in_cents, status=data.status)
    _invalidate_invoice_listings(listing_cache or get_listing_cache())
    return Committed(redirect_to=INVOICES_ROUTE, record_id=invoice_id)


def update_invoice(
    invoice_id: str,
    prior_state: Optional[ActionState],
    submission: Mapping[str, Any],
    *,
    gateway: Optional[PersistenceGateway] = None,
    listing_cache: Optional[ListingCache] = None,
) -> ActionResult:
    result = InvoiceSchema.validate(_extract(submission, INVOICE_FIELDS))
    if not result.success:
        return Rejected(errors=result.errors, message="Missing fields. Failed to update invoice")

    data = result.data
    amount_in_cents = CurrencyHelper.to_minor_units(data.amount)

    gateway = gateway or get_gateway()
    try:
        gateway.update_invoice(invoice_id, data.customer_id, amount_in_cents, data.status)
    except PersistenceError as exc:
        logger.error(
            "Database Error: failed to update invoice",
            exception=exc,
            action="update_invoice",
            invoice_id=invoice_id,
        )
        return Failed("Database Error: Failed to update invoice", kind=_failure_kind(exc))

    logger.audit("invoice.updated", resource=invoice_id, amount=amount_in_cents, status=data.status)
    _invalidate_invoice_listings(listing_cache or get_listing_cache())
    return Committed(redirect_to=INVOICES_ROUTE, record_id=invoice_id)


def delete_invoice(
    invoice_id: str,
    *,
    gateway: Optional[PersistenceGateway] = None,
    listing_cache: Optional[ListingCache] = None,
) -> ActionResult:
    gateway = gateway or get_gateway()
    try:
        gateway.delete_invoice(invoice_id)
    except PersistenceError as exc:
        logger.error(
            "Database Error: failed to delete invoice",
            exception=exc,
            action="delete_invoice",
            invoice_id=invoice_id,
        )
        return Failed("Database Error: Failed to delete invoice", kind=_failure_kind(exc))

    logger.audit("invoice.deleted", resource=invoice_id)
    _invalidate_invoice_listings(listing_cache or get_listing_cache())
    return Committed(message="Invoice deleted successfully", record_id=invoice_id)


def create_customer(
    prior_state: Optional[ActionState],
    submission: Mapping[str, Any],
    *,
    gateway: Optional[PersistenceGateway] = None,
    file_intake: Optional[FileIntake] = None,
    listing_cache: Optional[ListingCache] = None,
) -> ActionResult:
    result = CustomerSchema.validate(_extract(submission, CUSTOMER_FIELDS))
    if not result.success:
        return Rejected(errors=result.errors, message="Missing fields. Failed to create customer")

    data = result.data
    file_intake = file_intake or get_file_intake()
    gateway = gateway or get_gateway()

    try:
        file_path = file_intake.store(data.image)
    except UploadError as exc:
        logger.error(
            "Upload error: failed to store customer image",
            exception=exc,
            action="create_customer",
            kind=ErrorKind.IO.value,
        )
        return Failed("Database Error: Failed to create customer", kind=ErrorKind.IO)

    try:
        customer_id = gateway.insert_customer(data.name, data.email, file_path)
    except PersistenceError as exc:
        logger.error(
            "Database Error: failed to create customer",
            exception=exc,
            action="create_customer",
            kind=ErrorKind.DATABASE.value,
            orphaned_upload=file_path,
        )
        # The row never referenced the file, so it can go.
        file_intake.discard(file_path)
        return Failed("Database Error: Failed to create customer", kind=_failure_kind(exc))

    logger.audit("customer.created", resource=customer_id, image_url=file_path)
    (listing_cache or get_listing_cache()).invalidate(CUSTOMERS_ROUTE)
    return Committed(redirect_to=CUSTOMERS_ROUTE, record_id=customer_id)


def delete_customer(
    customer_id: str,
    *,
    gateway: Optional[PersistenceGateway] = None,
    listing_cache: Optional[ListingCache] = None,
) -> ActionResult:
    gateway = gateway or get_gateway()
    try:
        gateway.delete_customer(customer_id)
    except PersistenceError as exc:
        logger.error(
            "Database Error: failed to delete customer",
            exception=exc,
            action="delete_customer",
            customer_id=customer_id,
        )
        return Failed("Database Error: Failed to delete customer", kind=_failure_kind(exc))

    logger.audit("customer.deleted", resource=customer_id)
    (listing_cache or get_listing_cache()).invalidate(CUSTOMERS_ROUTE)
    return Committed(message="Customer deleted successfully", record_id=customer_id)
