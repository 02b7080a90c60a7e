from datetime import date
from unittest.mock import MagicMock

import pytest
from django.db import DatabaseError, connections

from invoices.gateway import PersistenceGateway, get_gateway
from invoices.models import Customer, Invoice
from invoices.validation.errors import PersistenceError, RecordNotFound
from tests.factories import CustomerFactory, InvoiceFactory


@pytest.fixture
def gateway():
    return PersistenceGateway(connections)


@pytest.mark.django_db
class TestInvoiceWrites:
    def test_insert_invoice(self, gateway):
        customer = CustomerFactory()
        invoice_id = gateway.insert_invoice(customer.id, 1250, "pending", date(2024, 3, 1))

        invoice = Invoice.objects.get(id=invoice_id)
        assert invoice.customer_id == customer.id
        assert invoice.amount == 1250
        assert invoice.status == "pending"
        assert invoice.date == date(2024, 3, 1)

    def test_insert_invoice_unknown_customer(self, gateway):
        with pytest.raises(RecordNotFound):
            gateway.insert_invoice("missing", 1250, "pending", date(2024, 3, 1))
        assert Invoice.objects.count() == 0

    def test_update_invoice_keeps_date(self, gateway):
        invoice = InvoiceFactory(date=date(2023, 12, 6))
        other = CustomerFactory()

        gateway.update_invoice(invoice.id, other.id, 9999, "paid")

        invoice.refresh_from_db()
        assert invoice.customer_id == other.id
        assert invoice.amount == 9999
        assert invoice.status == "paid"
        assert invoice.date == date(2023, 12, 6)

    def test_update_unknown_invoice(self, gateway):
        customer = CustomerFactory()
        with pytest.raises(RecordNotFound):
            gateway.update_invoice("missing", customer.id, 100, "paid")

    def test_update_with_unknown_customer_leaves_row(self, gateway):
        invoice = InvoiceFactory(amount=500)
        with pytest.raises(RecordNotFound):
            gateway.update_invoice(invoice.id, "missing", 100, "paid")
        invoice.refresh_from_db()
        assert invoice.amount == 500

    def test_delete_invoice(self, gateway):
        invoice = InvoiceFactory()
        gateway.delete_invoice(invoice.id)
        assert not Invoice.objects.filter(id=invoice.id).exists()

    def test_delete_unknown_invoice(self, gateway):
        with pytest.raises(RecordNotFound):
            gateway.delete_invoice("missing")


@pytest.mark.django_db
class TestCustomerWrites:
    def test_insert_customer(self, gateway):
        customer_id = gateway.insert_customer("Amy Burns", "amy@burns.com", "/srv/uploads/1_amy.png")
        customer = Customer.objects.get(id=customer_id)
        assert customer.name == "Amy Burns"
        assert customer.image_url == "/srv/uploads/1_amy.png"
        assert customer.image_src == "/uploads/1_amy.png"

    def test_hostile_input_is_stored_verbatim(self, gateway):
        name = "Robert'); DROP TABLE customers;--"
        customer_id = gateway.insert_customer(name, "bobby@tables.com", "/tmp/x.png")
        assert Customer.objects.get(id=customer_id).name == name

    def test_delete_customer(self, gateway):
        customer = CustomerFactory()
        gateway.delete_customer(customer.id)
        assert not Customer.objects.filter(id=customer.id).exists()

    def test_delete_unknown_customer(self, gateway):
        with pytest.raises(RecordNotFound):
            gateway.delete_customer("missing")


class TestGatewayFailures:
    def test_database_error_is_wrapped(self):
        cursor = MagicMock()
        cursor.execute.side_effect = DatabaseError("connection refused")
        connection = MagicMock()
        connection.cursor.return_value.__enter__.return_value = cursor
        gateway = PersistenceGateway({"default": connection})

        with pytest.raises(PersistenceError) as excinfo:
            gateway.delete_invoice("abc")

        assert excinfo.value.operation == "delete_invoice"
        assert not isinstance(excinfo.value, RecordNotFound)
        assert isinstance(excinfo.value.__cause__, DatabaseError)

    def test_close_is_idempotent(self):
        connection = MagicMock()
        gateway = PersistenceGateway({"default": connection})

        gateway.close()
        gateway.close()

        connection.close.assert_called_once_with()
        assert gateway.closed is True


def test_app_config_builds_gateway():
    gateway = get_gateway()
    assert isinstance(gateway, PersistenceGateway)
    assert gateway.alias == "default"
    assert get_gateway() is gateway
