"""
In-process cache for package availability results.

Results live in a Django cache backend (``CACHES["package_availability"]``,
a LocMemCache) and are written with ``version=`` set to the cache version
read before the stock was loaded. The cache is advisory: losing it only
costs a recomputation. It has no TTL; entries go stale when the version
counter advances (any stock-affecting event) and are dropped explicitly
through ``invalidate``.
"""
from typing import Any, Dict, Iterable, Optional
import logging
import uuid

from django.core.cache.backends.locmem import LocMemCache

logger = logging.getLogger(__name__)

AVAILABILITY_CACHE_ALIAS = "package_availability"


def _private_backend():
    """A LocMemCache no other instance shares, for caches built without a backend."""
    return LocMemCache(
        f"package-availability-{uuid.uuid4().hex}",
        {"TIMEOUT": None, "KEY_PREFIX": "pkg_avail", "OPTIONS": {"MAX_ENTRIES": 10000}},
    )


class AvailabilityCache:
    """
    Package id -> last computed availability result, stored in a Django cache.

    ``_versions`` records which version each key was written under. Lookups
    go through it, so a fresh instance never reads entries another instance
    left in a shared backend, and ``stats()`` can report a size.

    One instance is created per process and handed to the availability
    service. Concurrent writers are last-writer-wins; no locks are taken.
    """

    def __init__(self, backend=None, initial_version: int = 1):
        self.backend = backend if backend is not None else _private_backend()
        self._versions: Dict[str, int] = {}
        self._version = initial_version
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(package_id) -> str:
        return str(package_id)

    @property
    def version(self) -> int:
        return self._version

    def __len__(self):
        return len(self._versions)

    def __contains__(self, package_id):
        return self.peek(package_id) is not None

    def _drop(self, key):
        version = self._versions.pop(key, None)
        if version is None:
            return False
        self.backend.delete(key, version=version)
        return True

    def peek(self, package_id) -> Optional[Any]:
        """Return a valid cached result without touching the hit/miss counters."""
        key = self._key(package_id)
        if self._versions.get(key) != self._version:
            return None
        return self.backend.get(key, version=self._version)

    def get(self, package_id) -> Optional[Any]:
        key = self._key(package_id)
        stored_version = self._versions.get(key)

        if stored_version is None:
            self.misses += 1
            return None

        if stored_version != self._version:
            # Computed before the last stock change
            self._drop(key)
            self.misses += 1
            logger.debug(
                f"Stale availability entry for package {key} "
                f"(entry v{stored_version}, cache v{self._version})"
            )
            return None

        data = self.backend.get(key, version=stored_version)
        if data is None:
            # Culled by the backend
            self._versions.pop(key, None)
            self.misses += 1
            return None

        self.hits += 1
        return data

    def set(self, package_id, data, version: Optional[int] = None):
        """
        Store ``data`` for ``package_id``.

        ``version`` should be the cache version read before the stock was
        loaded, so a result computed across a version bump is born stale.
        """
        if version is None:
            version = self._version
        key = self._key(package_id)
        self._drop(key)
        self.backend.set(key, data, timeout=None, version=version)
        self._versions[key] = version

    def bump_version(self, reason: str = "") -> int:
        """Advance the version, invalidating every entry. Returns the new version."""
        self._version += 1
        self._clear()
        logger.info(
            f"Package availability cache bumped to v{self._version}"
            + (f" ({reason})" if reason else "")
        )
        return self._version

    def _clear(self):
        for key in list(self._versions):
            self._drop(key)

    def invalidate(self, package_id=None):
        if package_id is None:
            self._clear()
            logger.info("Package availability cache cleared for all packages")
        else:
            self._drop(self._key(package_id))
            logger.info(f"Package availability cache invalidated for package {package_id}")

    def invalidate_many(self, package_ids: Iterable) -> int:
        removed = 0
        for package_id in package_ids:
            if self._drop(self._key(package_id)):
                removed += 1
        return removed

    def stats(self) -> Dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "size": len(self._versions),
            "version": self._version,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups, 4) if lookups else 0.0,
        }
