from decimal import Decimal

import pytest
from django.db.models import ProtectedError

from invoices.models import Customer, Invoice, gen_uuid
from tests.factories import CustomerFactory, InvoiceFactory


@pytest.mark.django_db
class TestCustomerModel:
    def test_string_ids(self):
        customer = CustomerFactory()
        assert isinstance(customer.pk, str)
        assert len(customer.pk) == 36

    def test_image_src_uses_basename(self, settings):
        settings.UPLOAD_URL = "/uploads/"
        customer = CustomerFactory(image_url="/var/app/public/uploads/1700000000000_lee.png")
        assert customer.image_src == "/uploads/1700000000000_lee.png"

    def test_ordering_by_name(self):
        CustomerFactory(name="Zed")
        CustomerFactory(name="Amy")
        assert [c.name for c in Customer.objects.all()] == ["Amy", "Zed"]

    def test_customer_with_invoices_is_protected(self):
        invoice = InvoiceFactory()
        with pytest.raises(ProtectedError):
            invoice.customer.delete()


@pytest.mark.django_db
class TestInvoiceModel:
    def test_defaults(self):
        invoice = InvoiceFactory()
        assert invoice.status == Invoice.Status.PENDING
        assert str(invoice) == f"{invoice.id} - {invoice.customer.name}"

    def test_amount_major(self):
        invoice = InvoiceFactory(amount=123456)
        assert invoice.amount_major == Decimal("1234.56")


def test_gen_uuid_is_unique():
    assert gen_uuid() != gen_uuid()
