"""Caching of listing data keyed by listing route."""

from django.conf import settings
from django.core.cache import caches
from typing import Any, Callable, Optional
import hashlib
import json


INVOICES_ROUTE = "/dashboard/invoices"
CUSTOMERS_ROUTE = "/dashboard/customers"


class ListingCache:
    """Versioned cache for listing views.

    Every entry is keyed by its route plus the route's current version, so
    invalidating a route only bumps the version and every cached page or
    search of that route goes stale at once.
    """

    VERSION_KEY = "listing:version:{route}"

    def __init__(self, backend=None, timeout: Optional[int] = None):
        self.backend = backend if backend is not None else caches["default"]
        self.timeout = timeout if timeout is not None else getattr(settings, "LISTING_CACHE_TIMEOUT", 300)

    @staticmethod
    def make_key(prefix: str, *args: Any, **kwargs: Any) -> str:
        """Generate cache key from parameters."""
        key_data = f"{prefix}:" + ":".join(str(a) for a in args)
        if kwargs:
            key_data += ":" + json.dumps(kwargs, sort_keys=True, default=str)
        return hashlib.md5(key_data.encode()).hexdigest()

    def version(self, route: str) -> int:
        key = self.VERSION_KEY.format(route=route)
        version = self.backend.get(key)
        if version is None:
            self.backend.add(key, 1, None)
            version = self.backend.get(key, 1)
        return version

    def get_or_compute(self, route: str, compute: Callable[[], Any], **params: Any) -> Any:
        key = self.make_key("listing", route, self.version(route), **params)
        result = self.backend.get(key)
        if result is not None:
            return result

        result = compute()
        self.backend.set(key, result, self.timeout)
        return result

    def invalidate(self, route: str) -> None:
        """Mark every cached view of ``route`` as stale."""
        key = self.VERSION_KEY.format(route=route)
        try:
            self.backend.incr(key)
        except ValueError:
            # Never versioned: nothing cached under this route yet.
            self.backend.add(key, 2, None)


def get_listing_cache() -> ListingCache:
    return ListingCache()
