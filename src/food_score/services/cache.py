"""Simple cache abstractions."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

_logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Raised when a cache backend cannot be reached."""


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def set_many(self, items: dict[str, object], ttl_seconds: int) -> None:
        """Store several values sharing one TTL."""

    def is_valid(self, key: str) -> bool:
        """Return true when a non-expired value is stored for the key."""

    def clear(self) -> None:
        """Drop every cached value."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """In-process cache with per-entry expiry."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def set_many(self, items: dict[str, object], ttl_seconds: int) -> None:
        for key, value in items.items():
            self.set(key, value, ttl_seconds=ttl_seconds)

    def is_valid(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class TieredCache(Cache):
    """Memory cache backed by a durable cache.

    Reads try memory first and backfill it from the durable tier. Writes go to
    both tiers. Durable read and write failures are logged and skipped; a failed
    clear propagates.
    """

    memory: Cache
    durable: Cache
    backfill_ttl_seconds: int = 3600

    def get(self, key: str) -> object | None:
        value = self.memory.get(key)
        if value is not None:
            return value
        try:
            value = self.durable.get(key)
        except CacheError:
            _logger.warning("Durable cache read failed for %s", key, exc_info=True)
            return None
        if value is not None:
            self.memory.set(key, value, ttl_seconds=self.backfill_ttl_seconds)
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self.memory.set(key, value, ttl_seconds=ttl_seconds)
        try:
            self.durable.set(key, value, ttl_seconds=ttl_seconds)
        except CacheError:
            _logger.warning("Durable cache write failed for %s", key, exc_info=True)

    def set_many(self, items: dict[str, object], ttl_seconds: int) -> None:
        self.memory.set_many(items, ttl_seconds=ttl_seconds)
        try:
            self.durable.set_many(items, ttl_seconds=ttl_seconds)
        except CacheError:
            _logger.warning("Durable cache write failed for %s keys", len(items), exc_info=True)

    def is_valid(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        self.memory.clear()
        self.durable.clear()
        _logger.info("Cleared memory and durable cache tiers")
