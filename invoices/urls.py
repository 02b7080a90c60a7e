from django.urls import path

from .views import auth_views, customer_views, invoice_views

app_name = "invoices"

urlpatterns = [
    path("", auth_views.home, name="home"),
    path("login/", auth_views.login_view, name="login"),
    path("dashboard/", auth_views.dashboard, name="dashboard"),
    path("dashboard/logout/", auth_views.logout_view, name="logout"),

    path("dashboard/invoices/", invoice_views.invoice_list, name="invoice_list"),
    path("dashboard/invoices/create/", invoice_views.invoice_create, name="invoice_create"),
    path("dashboard/invoices/<str:invoice_id>/edit/", invoice_views.invoice_edit, name="invoice_edit"),
    path("dashboard/invoices/<str:invoice_id>/delete/", invoice_views.invoice_delete, name="invoice_delete"),

    path("dashboard/customers/", customer_views.customer_list, name="customer_list"),
    path("dashboard/customers/create/", customer_views.customer_create, name="customer_create"),
    path("dashboard/customers/<str:customer_id>/delete/", customer_views.customer_delete, name="customer_delete"),
]
