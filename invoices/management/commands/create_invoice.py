"""Create an invoice from the command line through the same action the dashboard uses."""
from django.core.management.base import BaseCommand, CommandError

from invoices import actions


class Command(BaseCommand):
    help = "Create an invoice for a customer. Amount is in major units (e.g. 12.50)."

    def add_arguments(self, parser):
        parser.add_argument("customer_id")
        parser.add_argument("amount")
        parser.add_argument(
            "--status",
            default="pending",
            choices=["pending", "paid"],
            help="Invoice status (default: pending)",
        )

    def handle(self, *args, **options):
        submission = {
            "customerId": options["customer_id"],
            "amount": options["amount"],
            "status": options["status"],
        }
        result = actions.create_invoice(None, submission)

        if isinstance(result, actions.Rejected):
            for field, errors in result.errors.items():
                for error in errors:
                    self.stderr.write(f"  {field}: {error}")
            raise CommandError(result.message)
        if isinstance(result, actions.Failed):
            raise CommandError(result.message)

        self.stdout.write(self.style.SUCCESS(f"Created invoice {result.record_id}"))
