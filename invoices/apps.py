import atexit
import logging

from django.apps import AppConfig
from django.db import connections

logger = logging.getLogger(__name__)


class InvoicesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "invoices"
    verbose_name = "Invoices & Customers"

    gateway = None

    def ready(self):
        # The gateway only keeps the connection handler; connections open on first use.
        from .gateway import PersistenceGateway

        self.gateway = PersistenceGateway(connections)
        atexit.register(self.gateway.close)
        logger.debug("Persistence gateway ready (alias=%s)", self.gateway.alias)
