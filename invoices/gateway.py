"""
Persistence gateway for the invoice and customer tables.

One parameterized write per (entity, verb). Values arrive already validated
and coerced; every statement binds them as parameters. Failures surface as
PersistenceError, or RecordNotFound when the statement touched no row.
"""

import logging
from datetime import date
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections as default_connections

from .models import gen_uuid
from .validation.errors import PersistenceError, RecordNotFound

logger = logging.getLogger(__name__)


# Each write is a single statement. Invoice writes resolve the customer
# reference in the same statement so an unknown customer touches no row.
INSERT_INVOICE_SQL = """
    INSERT INTO invoices (id, customer_id, amount, status, date)
    SELECT %s, id, %s, %s, %s FROM customers WHERE id = %s
"""

UPDATE_INVOICE_SQL = """
    UPDATE invoices
    SET customer_id = %s, amount = %s, status = %s
    WHERE id = %s AND EXISTS (SELECT 1 FROM customers WHERE id = %s)
"""

DELETE_INVOICE_SQL = "DELETE FROM invoices WHERE id = %s"

INSERT_CUSTOMER_SQL = """
    INSERT INTO customers (id, name, email, image_url)
    VALUES (%s, %s, %s, %s)
"""

DELETE_CUSTOMER_SQL = "DELETE FROM customers WHERE id = %s"


class PersistenceGateway:
    """Executes write statements through an injected connection handler."""

    def __init__(self, connections=None, alias: str = DEFAULT_DB_ALIAS):
        self.connections = connections if connections is not None else default_connections
        self.alias = alias
        self.closed = False

    @property
    def connection(self):
        return self.connections[self.alias]

    def close(self) -> None:
        """Release the connections held for this gateway's alias."""
        if self.closed:
            return
        self.connection.close()
        self.closed = True
        logger.info("Persistence gateway closed (alias=%s)", self.alias)

    def _execute(self, operation: str, sql: str, params: list) -> int:
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql, params)
                return cursor.rowcount
        except DatabaseError as exc:
            raise PersistenceError(f"{operation} failed: {exc}", operation=operation) from exc

    def insert_invoice(self, customer_id: str, amount: int, status: str, created: date) -> str:
        invoice_id = gen_uuid()
        rows = self._execute(
            "insert_invoice",
            INSERT_INVOICE_SQL,
            [invoice_id, amount, status, self.connection.ops.adapt_datefield_value(created), customer_id],
        )
        if rows == 0:
            raise RecordNotFound(f"Customer {customer_id} does not exist", operation="insert_invoice")
        return invoice_id

    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        rows = self._execute(
            "update_invoice",
            UPDATE_INVOICE_SQL,
            [customer_id, amount, status, invoice_id, customer_id],
        )
        if rows == 0:
            raise RecordNotFound(
                f"Invoice {invoice_id} or customer {customer_id} does not exist",
                operation="update_invoice",
            )

    def delete_invoice(self, invoice_id: str) -> None:
        rows = self._execute("delete_invoice", DELETE_INVOICE_SQL, [invoice_id])
        if rows == 0:
            raise RecordNotFound(f"Invoice {invoice_id} does not exist", operation="delete_invoice")

    def insert_customer(self, name: str, email: str, image_url: str) -> str:
        customer_id = gen_uuid()
        self._execute(
            "insert_customer",
            INSERT_CUSTOMER_SQL,
            [customer_id, name, email, image_url],
        )
        return customer_id

    def delete_customer(self, customer_id: str) -> None:
        rows = self._execute("delete_customer", DELETE_CUSTOMER_SQL, [customer_id])
        if rows == 0:
            raise RecordNotFound(f"Customer {customer_id} does not exist", operation="delete_customer")


def get_gateway(alias: Optional[str] = None) -> PersistenceGateway:
    """Return the gateway built by the app config at startup."""
    from django.apps import apps

    gateway = apps.get_app_config("invoices").gateway
    if alias is not None and alias != gateway.alias:
        return PersistenceGateway(gateway.connections, alias)
    return gateway
