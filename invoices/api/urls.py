"""API URL routing for the dashboard mutations."""
from django.urls import path

from .views import CustomerCreateView, CustomerDetailView, InvoiceCreateView, InvoiceDetailView

urlpatterns = [
    path("invoices/", InvoiceCreateView.as_view(), name="api-invoice-create"),
    path("invoices/<str:invoice_id>/", InvoiceDetailView.as_view(), name="api-invoice-detail"),
    path("customers/", CustomerCreateView.as_view(), name="api-customer-create"),
    path("customers/<str:customer_id>/", CustomerDetailView.as_view(), name="api-customer-detail"),
]
