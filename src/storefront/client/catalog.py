"""Client-side mirror of the product catalog.

The backend is authoritative. The mirror is served only while it is younger
than ``ttl_seconds`` and is dropped whenever the client changes the catalog.
"""

import time
from collections.abc import Callable

from storefront.client.storage import CATALOG_KEY, LocalStorage


class CatalogCache:
    def __init__(
        self,
        storage: LocalStorage,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def get(self, category: str | None = None) -> list[dict] | None:
        """Cached products for ``category`` (all when None), or None if stale or absent."""
        entry = (self._storage.get(CATALOG_KEY) or {}).get(category or "*")
        if not entry:
            return None
        if self._clock() - entry.get("fetched_at", 0) > self.ttl_seconds:
            return None
        return entry.get("products")

    def put(self, products: list[dict], category: str | None = None) -> None:
        cached = self._storage.get(CATALOG_KEY) or {}
        cached[category or "*"] = {"fetched_at": self._clock(), "products": products}
        self._storage.set(CATALOG_KEY, cached)

    def invalidate(self) -> None:
        self._storage.delete(CATALOG_KEY)
