import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from invoices.models import Invoice
from tests.factories import InvoiceFactory


@pytest.fixture
def admin_client(client, db):
    get_user_model().objects.create_superuser(username='root', email='root@example.com', password='123456')
    client.login(username='root', password='123456')
    return client


@pytest.mark.django_db
class TestReadOnlyAdmin:
    def test_changelist_is_browsable(self, admin_client):
        invoice = InvoiceFactory()
        response = admin_client.get(reverse('admin:invoices_invoice_changelist'))
        assert response.status_code == 200
        assert invoice.id.encode() in response.content

    @pytest.mark.parametrize('model', ['invoice', 'customer'])
    def test_add_is_forbidden(self, admin_client, model):
        response = admin_client.get(reverse(f'admin:invoices_{model}_add'))
        assert response.status_code == 403

    def test_change_is_refused(self, admin_client):
        invoice = InvoiceFactory(amount=1250)
        url = reverse('admin:invoices_invoice_change', args=[invoice.id])

        assert admin_client.get(url).status_code == 200
        response = admin_client.post(url, {'customer': invoice.customer_id, 'amount': '-1', 'status': 'paid', 'date': '2020-01-01'})

        assert response.status_code == 403
        invoice.refresh_from_db()
        assert invoice.amount == 1250

    def test_delete_is_forbidden(self, admin_client):
        invoice = InvoiceFactory()
        response = admin_client.post(reverse('admin:invoices_invoice_delete', args=[invoice.id]), {'post': 'yes'})
        assert response.status_code == 403
        assert Invoice.objects.filter(id=invoice.id).exists()
