"""Namespaced in-memory cache with a fixed time-to-live."""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

DEFAULT_TTL = timedelta(hours=6)

SEARCH_NAMESPACE = "search"
DETAIL_NAMESPACE = "detail"


class Cache(Protocol):
    """Cache interface with independent key namespaces."""

    def get(self, namespace: str, key: object) -> object | None:
        """Return a cached value if present and not expired."""

    def put(self, namespace: str, key: object, value: object) -> None:
        """Store a value, replacing any existing entry."""

    def sweep(self) -> int:
        """Remove expired entries and return how many were removed."""

    def stats(self) -> dict[str, int]:
        """Return the number of stored entries per namespace."""


@dataclass(frozen=True)
class _CacheEntry:
    value: object
    stored_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class TtlCache(Cache):
    """Thread-safe in-memory cache.

    Expired entries read as misses but stay in memory until ``sweep`` runs,
    so ``stats`` may still count them.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Cache TTL must be positive")
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._namespaces: dict[str, dict[object, _CacheEntry]] = {}

    def get(self, namespace: str, key: object) -> object | None:
        """Return a cached value if it hasn't expired."""
        now = self._clock()
        with self._lock:
            entry = self._namespaces.get(namespace, {}).get(key)
        if entry is None or self._is_expired(entry, now):
            return None
        return entry.value

    def put(self, namespace: str, key: object, value: object) -> None:
        """Store a value stamped with the current time."""
        entry = _CacheEntry(value=value, stored_at=self._clock())
        with self._lock:
            self._namespaces.setdefault(namespace, {})[key] = entry

    def sweep(self) -> int:
        """Drop every expired entry across all namespaces."""
        now = self._clock()
        removed = 0
        with self._lock:
            for entries in self._namespaces.values():
                expired = [
                    key
                    for key, entry in entries.items()
                    if self._is_expired(entry, now)
                ]
                for key in expired:
                    del entries[key]
                removed += len(expired)
        return removed

    def stats(self) -> dict[str, int]:
        """Return stored entry counts per namespace without sweeping."""
        with self._lock:
            return {name: len(entries) for name, entries in self._namespaces.items()}

    def _is_expired(self, entry: _CacheEntry, now: datetime) -> bool:
        return now - entry.stored_at >= self.ttl
