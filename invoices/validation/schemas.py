"""
Domain-Specific Validation Schemas

Centralized validation rules per entity.
Server is authoritative; templates mirror constraints for UX.

Each schema provides:
- Field constraints (required, min length, format, range, choices, file rules)
- The exact error message shown next to the field
- A typed value object built from the coerced fields

Validation never raises. ``validate`` returns a SchemaResult that is either
successful (with ``data``) or carries every field error of the submission.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from .errors import ErrorCode, FieldError, group_field_errors

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

MAX_IMAGE_SIZE = 5_000_000
IMAGE_CONTENT_TYPES = ("image/jpeg", "image/png", "image/jpg")


@dataclass
class FieldConstraints:
    kind: str = "text"
    required: bool = True
    required_message: Optional[str] = None
    min_length: Optional[int] = None
    min_length_message: Optional[str] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    gt: Optional[Decimal] = None
    gt_message: Optional[str] = None
    invalid_message: Optional[str] = None
    choices: Optional[List[str]] = None
    choices_message: Optional[str] = None
    max_size: Optional[int] = None
    max_size_message: Optional[str] = None
    content_types: Optional[Tuple[str, ...]] = None
    content_types_message: Optional[str] = None


@dataclass
class SchemaResult:
    success: bool
    data: Any = None
    field_errors: List[FieldError] = field(default_factory=list)

    @property
    def errors(self) -> Dict[str, List[str]]:
        return group_field_errors(self.field_errors)


@dataclass(frozen=True)
class InvoiceInput:
    customer_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class CustomerInput:
    name: str
    email: str
    image: Any


class BaseSchema:
    FIELDS: ClassVar[Dict[str, FieldConstraints]] = {}

    @classmethod
    def validate(cls, data: Dict[str, Any]) -> SchemaResult:
        errors: List[FieldError] = []
        cleaned: Dict[str, Any] = {}

        for field_name, constraints in cls.FIELDS.items():
            value, field_errors = cls._validate_field(field_name, data.get(field_name), constraints)
            errors.extend(field_errors)
            cleaned[field_name] = value

        if errors:
            return SchemaResult(success=False, field_errors=errors)
        return SchemaResult(success=True, data=cls.build(cleaned))

    @classmethod
    def build(cls, cleaned: Dict[str, Any]) -> Any:
        return cleaned

    @classmethod
    def _validate_field(
        cls,
        field_name: str,
        value: Any,
        constraints: FieldConstraints,
    ) -> Tuple[Any, List[FieldError]]:
        if constraints.kind == "decimal":
            return cls._validate_decimal(field_name, value, constraints)
        if constraints.kind == "file":
            return value, cls._validate_file(field_name, value, constraints)

        errors = []

        if value is None:
            if constraints.required:
                errors.append(FieldError(
                    field=field_name,
                    code=ErrorCode.FIELD_REQUIRED.value,
                    message=constraints.required_message or f"{cls._humanize(field_name)} is required.",
                ))
            return value, errors

        value = str(value)

        if constraints.pattern and not re.match(constraints.pattern, value):
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID_FORMAT.value,
                message=constraints.pattern_message or f"{cls._humanize(field_name)} format is invalid.",
            ))

        if constraints.min_length and len(value) < constraints.min_length:
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_TOO_SHORT.value,
                message=constraints.min_length_message
                or f"{cls._humanize(field_name)} must be at least {constraints.min_length} characters.",
            ))

        if constraints.choices and value not in constraints.choices:
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID.value,
                message=constraints.choices_message
                or f"{cls._humanize(field_name)} must be one of: {', '.join(constraints.choices)}.",
            ))

        return value, errors

    @classmethod
    def _validate_decimal(
        cls,
        field_name: str,
        value: Any,
        constraints: FieldConstraints,
    ) -> Tuple[Optional[Decimal], List[FieldError]]:
        # Missing and blank input coerce to zero, the range rule then reports it.
        raw = "" if value is None else str(value).strip()
        try:
            number = Decimal(raw) if raw else Decimal("0")
        except (InvalidOperation, ValueError):
            number = None

        if number is None or not number.is_finite():
            return None, [FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID.value,
                message=constraints.invalid_message or f"{cls._humanize(field_name)} must be a valid number.",
            )]

        if constraints.gt is not None and not number > constraints.gt:
            return number, [FieldError(
                field=field_name,
                code=ErrorCode.FIELD_OUT_OF_RANGE.value,
                message=constraints.gt_message
                or f"{cls._humanize(field_name)} must be greater than {constraints.gt}.",
            )]

        return number, []

    @classmethod
    def _validate_file(
        cls,
        field_name: str,
        upload: Any,
        constraints: FieldConstraints,
    ) -> List[FieldError]:
        if upload is None or not getattr(upload, "name", ""):
            return [FieldError(
                field=field_name,
                code=ErrorCode.FIELD_REQUIRED.value,
                message=constraints.required_message or f"{cls._humanize(field_name)} is required.",
            )]

        errors = []

        if constraints.max_size is not None and not upload.size < constraints.max_size:
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_OUT_OF_RANGE.value,
                message=constraints.max_size_message or "File is too large.",
            ))

        content_type = getattr(upload, "content_type", None)
        if constraints.content_types and content_type not in constraints.content_types:
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID_FORMAT.value,
                message=constraints.content_types_message or "File type is not supported.",
            ))

        return errors

    @staticmethod
    def _humanize(field_name: str) -> str:
        return field_name.replace("_", " ").title()


class InvoiceSchema(BaseSchema):
    STATUS_CHOICES = ["pending", "paid"]

    FIELDS = {
        "customerId": FieldConstraints(
            required=True,
            required_message="Please select a customer",
            min_length=1,
            min_length_message="Please select a customer",
        ),
        "amount": FieldConstraints(
            kind="decimal",
            gt=Decimal("0"),
            gt_message="Please enter an amount greater than $0.",
            invalid_message="Please enter a valid amount.",
        ),
        "status": FieldConstraints(
            required=True,
            required_message="Please select an invoice status",
            choices=STATUS_CHOICES,
            choices_message="Please select an invoice status",
        ),
    }

    @classmethod
    def build(cls, cleaned: Dict[str, Any]) -> InvoiceInput:
        return InvoiceInput(
            customer_id=cleaned["customerId"],
            amount=cleaned["amount"],
            status=cleaned["status"],
        )


class CustomerSchema(BaseSchema):
    FIELDS = {
        "name": FieldConstraints(
            required=True,
            required_message="Customer name cannot be blank",
            min_length=1,
            min_length_message="Customer name cannot be blank",
        ),
        "email": FieldConstraints(
            required=True,
            required_message="Email cannot be blank",
            pattern=EMAIL_PATTERN,
            pattern_message="Please enter a valid email address",
            min_length=1,
            min_length_message="Email cannot be blank",
        ),
        "image_url": FieldConstraints(
            kind="file",
            required=True,
            required_message="Please upload a profile image.",
            max_size=MAX_IMAGE_SIZE,
            max_size_message="File can't be bigger than 5MB.",
            content_types=IMAGE_CONTENT_TYPES,
            content_types_message="File format must be either jpg, jpeg or png.",
        ),
    }

    @classmethod
    def build(cls, cleaned: Dict[str, Any]) -> CustomerInput:
        return CustomerInput(
            name=cleaned["name"],
            email=cleaned["email"],
            image=cleaned["image_url"],
        )
