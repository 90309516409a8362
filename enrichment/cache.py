"""
Lookup Cache

Short-lived cache for external lookup results, keyed by
``<lookup-kind>:<ip>``.

DESIGN RULES:
- Injected into providers, never a module global
- Expired entries are treated as absent (checked lazily on read)
- Bounded size, least recently used entry evicted first
- Storage-agnostic interface
"""

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Optional


DEFAULT_TTL_SECONDS = 60.0
DEFAULT_MAX_ENTRIES = 1024


def cache_key(kind: str, ip: str) -> str:
    """Build the cache key for a lookup kind and address."""
    return f"{kind}:{ip}"


@dataclass(frozen=True)
class LookupCacheEntry:
    """A cached lookup value and its expiry (clock seconds)."""
    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class LookupCache(ABC):
    """
    Abstract base for lookup caches.

    Implementations:
    - InMemoryLookupCache (single warm instance)
    - Key-value store backed cache (multi-instance hosts, future)
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store a value for ttl_seconds (cache default when None)."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""
        pass


class InMemoryLookupCache(LookupCache):
    """
    In-process TTL cache with an LRU size bound.

    NOT shared across instances - data lives only in process memory.
    Thread-safe for concurrent access.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Default lifetime of an entry
            max_entries: Entries kept before LRU eviction
            clock: Monotonic seconds source (injectable for tests)
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, LookupCacheEntry]" = OrderedDict()
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = LookupCacheEntry(
                key=key,
                value=value,
                expires_at=self._clock() + ttl,
            )
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
