from __future__ import annotations

import os
from decimal import Decimal
from uuid import uuid4

from django.conf import settings
from django.db import models

from .utils import CurrencyHelper


def gen_uuid() -> str:
    return str(uuid4())


class Customer(models.Model):
    id = models.CharField(max_length=36, primary_key=True, default=gen_uuid, editable=False)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=254)
    # Path written by the file intake, stored verbatim.
    image_url = models.CharField(max_length=500)

    class Meta:
        db_table = "customers"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def image_src(self) -> str:
        return f"{settings.UPLOAD_URL}{os.path.basename(self.image_url)}"


class Invoice(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"

    id = models.CharField(max_length=36, primary_key=True, default=gen_uuid, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="invoices")
    # Minor units (cents).
    amount = models.IntegerField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    date = models.DateField()

    class Meta:
        db_table = "invoices"
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["status"], name="invoices_status_idx"),
            models.Index(fields=["customer", "status"], name="invoices_customer_status_idx"),
        ]

    def __str__(self):
        return f"{self.id} - {self.customer.name}"

    @property
    def amount_major(self) -> Decimal:
        return CurrencyHelper.from_minor_units(self.amount)
