"""Management command for a system health check."""
import os
import uuid

from django.conf import settings
from django.core.cache import caches
from django.core.management.base import BaseCommand, CommandError

from invoices.health import check_database


class Command(BaseCommand):
    help = "Run health checks on the database, upload root, cache and security settings"

    def handle(self, *args, **options):
        self.stdout.write(self.style.NOTICE("Admin Dashboard System Health Check"))
        self.stdout.write("=" * 60)

        checks_passed = 0
        checks_failed = 0

        checks_passed, checks_failed = self._check_database(checks_passed, checks_failed)
        checks_passed, checks_failed = self._check_uploads(checks_passed, checks_failed)
        checks_passed, checks_failed = self._check_cache(checks_passed, checks_failed)
        checks_passed, checks_failed = self._check_security(checks_passed, checks_failed)

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(f"Results: {self.style.SUCCESS(f'{checks_passed} passed')}, {self.style.ERROR(f'{checks_failed} failed') if checks_failed else f'{checks_failed} failed'}")

        if checks_failed == 0:
            self.stdout.write(self.style.SUCCESS("\nAll systems are operational!"))
        else:
            raise CommandError(f"{checks_failed} check(s) need attention.")

    def _check_database(self, passed, failed):
        self.stdout.write("\n[Database]")
        result = check_database()
        if result["status"] == "ok":
            self.stdout.write(f"  Connection: {self.style.SUCCESS('OK')} ({result['response_time_ms']} ms)")
            passed += 1
        else:
            self.stdout.write(f"  Connection: {self.style.ERROR('FAILED')} - {result['error']}")
            failed += 1
        return passed, failed

    def _check_uploads(self, passed, failed):
        self.stdout.write("\n[Uploads]")
        upload_root = settings.UPLOAD_ROOT
        self.stdout.write(f"  Root: {upload_root}")
        try:
            os.makedirs(upload_root, exist_ok=True)
        except OSError as e:
            self.stdout.write(f"  Writable: {self.style.ERROR('FAILED')} - {str(e)}")
            return passed, failed + 1

        if os.access(upload_root, os.W_OK):
            self.stdout.write(f"  Writable: {self.style.SUCCESS('OK')}")
            passed += 1
        else:
            self.stdout.write(f"  Writable: {self.style.ERROR('FAILED')}")
            failed += 1
        return passed, failed

    def _check_cache(self, passed, failed):
        self.stdout.write("\n[Cache]")
        backend = caches["default"]
        key = f"health_check:{uuid.uuid4().hex}"
        try:
            backend.set(key, "ok", 10)
            value = backend.get(key)
            backend.delete(key)
        except Exception as e:
            self.stdout.write(f"  Round trip: {self.style.ERROR('FAILED')} - {str(e)}")
            return passed, failed + 1

        if value == "ok":
            self.stdout.write(f"  Round trip: {self.style.SUCCESS('OK')}")
            passed += 1
        else:
            self.stdout.write(f"  Round trip: {self.style.ERROR('FAILED')}")
            failed += 1
        return passed, failed

    def _check_security(self, passed, failed):
        self.stdout.write("\n[Security]")

        secret_key = settings.SECRET_KEY
        if secret_key and not secret_key.startswith("django-insecure-"):
            self.stdout.write(f"  SECRET_KEY: {self.style.SUCCESS('Secure')}")
            passed += 1
        elif settings.DEBUG:
            self.stdout.write(f"  SECRET_KEY: {self.style.WARNING('Insecure (development)')}")
        else:
            self.stdout.write(f"  SECRET_KEY: {self.style.ERROR('Insecure')}")
            failed += 1

        if not settings.DEBUG:
            self.stdout.write(f"  DEBUG Mode: {self.style.SUCCESS('Disabled')}")
        else:
            self.stdout.write(f"  DEBUG Mode: {self.style.WARNING('Enabled')}")
        passed += 1

        return passed, failed
