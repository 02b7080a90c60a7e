from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from invoices.validation import CustomerSchema, InvoiceSchema
from invoices.validation.errors import ErrorCode

from .conftest import PNG_BYTES


def valid_invoice(**overrides):
    data = {"customerId": "c-1", "amount": "12.50", "status": "pending"}
    data.update(overrides)
    return data


class TestInvoiceSchema:
    def test_valid_submission_builds_typed_input(self):
        result = InvoiceSchema.validate(valid_invoice())
        assert result.success is True
        assert result.data.customer_id == "c-1"
        assert result.data.amount == Decimal("12.50")
        assert result.data.status == "pending"

    def test_every_field_missing(self):
        result = InvoiceSchema.validate({})
        assert result.success is False
        assert result.errors == {
            "customerId": ["Please select a customer"],
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status"],
        }

    @pytest.mark.parametrize("amount", ["", "0", "0.00", "-5"])
    def test_amount_must_be_positive(self, amount):
        result = InvoiceSchema.validate(valid_invoice(amount=amount))
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity"])
    def test_non_numeric_amount(self, amount):
        result = InvoiceSchema.validate(valid_invoice(amount=amount))
        assert result.errors == {"amount": ["Please enter a valid amount."]}

    def test_numeric_amount_accepted(self):
        result = InvoiceSchema.validate(valid_invoice(amount=7))
        assert result.data.amount == Decimal("7")

    def test_unknown_status_rejected(self):
        result = InvoiceSchema.validate(valid_invoice(status="overdue"))
        assert result.errors == {"status": ["Please select an invoice status"]}
        assert result.field_errors[0].code == ErrorCode.FIELD_INVALID.value

    def test_empty_customer_rejected(self):
        result = InvoiceSchema.validate(valid_invoice(customerId=""))
        assert result.errors == {"customerId": ["Please select a customer"]}
        assert result.field_errors[0].code == ErrorCode.FIELD_TOO_SHORT.value


class TestCustomerSchema:
    def image(self, size=None, content_type="image/png", name="avatar.png"):
        content = PNG_BYTES if size is None else b"\x00" * size
        return SimpleUploadedFile(name, content, content_type=content_type)

    def test_valid_submission(self):
        image = self.image()
        result = CustomerSchema.validate({"name": "Lee Robinson", "email": "lee@robinson.com", "image_url": image})
        assert result.success is True
        assert result.data.name == "Lee Robinson"
        assert result.data.image is image

    def test_empty_email_reports_both_rules_in_order(self):
        result = CustomerSchema.validate({"name": "Lee", "email": "", "image_url": self.image()})
        assert result.errors == {
            "email": ["Please enter a valid email address", "Email cannot be blank"],
        }

    def test_missing_email_reports_blank_only(self):
        result = CustomerSchema.validate({"name": "Lee", "image_url": self.image()})
        assert result.errors == {"email": ["Email cannot be blank"]}

    def test_malformed_email(self):
        result = CustomerSchema.validate({"name": "Lee", "email": "not-an-email", "image_url": self.image()})
        assert result.errors == {"email": ["Please enter a valid email address"]}

    def test_blank_name(self):
        result = CustomerSchema.validate({"name": "", "email": "lee@robinson.com", "image_url": self.image()})
        assert result.errors == {"name": ["Customer name cannot be blank"]}

    def test_missing_image(self):
        result = CustomerSchema.validate({"name": "Lee", "email": "lee@robinson.com"})
        assert result.errors == {"image_url": ["Please upload a profile image."]}

    def test_image_without_name_counts_as_missing(self):
        result = CustomerSchema.validate({"name": "Lee", "email": "lee@robinson.com", "image_url": self.image(name="")})
        assert result.errors == {"image_url": ["Please upload a profile image."]}

    def test_image_exactly_at_limit_rejected(self):
        result = CustomerSchema.validate({
            "name": "Lee", "email": "lee@robinson.com", "image_url": self.image(size=5_000_000),
        })
        assert result.errors == {"image_url": ["File can't be bigger than 5MB."]}

    def test_image_just_under_limit_accepted(self):
        result = CustomerSchema.validate({
            "name": "Lee", "email": "lee@robinson.com", "image_url": self.image(size=4_999_999),
        })
        assert result.success is True

    def test_oversized_gif_reports_both_file_rules(self):
        result = CustomerSchema.validate({
            "name": "Lee",
            "email": "lee@robinson.com",
            "image_url": self.image(size=5_000_001, content_type="image/gif", name="a.gif"),
        })
        assert result.errors == {
            "image_url": ["File can't be bigger than 5MB.", "File format must be either jpg, jpeg or png."],
        }
