"""Read side for the dashboard pages: tables, pagination, form choices and cards."""

import math
from typing import Any, Dict, List, Optional

from django.db.models import CharField, Count, Q, Sum, Value
from django.db.models.functions import Cast, Coalesce

from .models import Customer, Invoice

ITEMS_PER_PAGE = 6


def _offset(page: int) -> int:
    return (max(page, 1) - 1) * ITEMS_PER_PAGE


def _invoice_search(query: str) -> Q:
    if not query:
        return Q()
    return (
        Q(customer__name__icontains=query)
        | Q(customer__email__icontains=query)
        | Q(status__icontains=query)
        | Q(amount_text__icontains=query)
        | Q(date_text__icontains=query)
    )


def _filtered_invoices(query: str):
    return (
        Invoice.objects
        .annotate(
            amount_text=Cast("amount", CharField()),
            date_text=Cast("date", CharField()),
        )
        .filter(_invoice_search(query))
    )


def fetch_filtered_invoices(query: str = "", page: int = 1) -> List[Dict[str, Any]]:
    offset = _offset(page)
    rows = (
        _filtered_invoices(query)
        .select_related("customer")
        .order_by("-date", "id")[offset:offset + ITEMS_PER_PAGE]
    )
    return [
        {
            "id": invoice.id,
            "amount": invoice.amount,
            "date": invoice.date,
            "status": invoice.status,
            "name": invoice.customer.name,
            "email": invoice.customer.email,
            "image_src": invoice.customer.image_src,
        }
        for invoice in rows
    ]


def fetch_invoice_pages(query: str = "") -> int:
    return math.ceil(_filtered_invoices(query).count() / ITEMS_PER_PAGE)


def fetch_invoice_by_id(invoice_id: str) -> Optional[Dict[str, Any]]:
    invoice = Invoice.objects.filter(id=invoice_id).first()
    if invoice is None:
        return None
    return {
        "id": invoice.id,
        "customer_id": invoice.customer_id,
        # Form fields take major units.
        "amount": invoice.amount_major,
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_customers() -> List[Dict[str, str]]:
    return list(Customer.objects.order_by("name").values("id", "name"))


def _filtered_customers(query: str):
    customers = Customer.objects.all()
    if query:
        customers = customers.filter(Q(name__icontains=query) | Q(email__icontains=query))
    return customers


def fetch_filtered_customers(query: str = "", page: int = 1) -> List[Dict[str, Any]]:
    offset = _offset(page)
    rows = (
        _filtered_customers(query)
        .annotate(
            total_invoices=Count("invoices"),
            total_pending=Coalesce(Sum("invoices__amount", filter=Q(invoices__status=Invoice.Status.PENDING)), Value(0)),
            total_paid=Coalesce(Sum("invoices__amount", filter=Q(invoices__status=Invoice.Status.PAID)), Value(0)),
        )
        .order_by("name", "id")[offset:offset + ITEMS_PER_PAGE]
    )
    return [
        {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "image_src": customer.image_src,
            "total_invoices": customer.total_invoices,
            "total_pending": customer.total_pending,
            "total_paid": customer.total_paid,
        }
        for customer in rows
    ]


def fetch_customer_pages(query: str = "") -> int:
    return math.ceil(_filtered_customers(query).count() / ITEMS_PER_PAGE)


def fetch_card_data() -> Dict[str, int]:
    totals = Invoice.objects.aggregate(
        paid=Coalesce(Sum("amount", filter=Q(status=Invoice.Status.PAID)), Value(0)),
        pending=Coalesce(Sum("amount", filter=Q(status=Invoice.Status.PENDING)), Value(0)),
    )
    return {
        "number_of_invoices": Invoice.objects.count(),
        "number_of_customers": Customer.objects.count(),
        "total_paid_invoices": totals["paid"],
        "total_pending_invoices": totals["pending"],
    }
