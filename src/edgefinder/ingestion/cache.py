"""Shared TTL-based cache for decoded upstream JSON payloads."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlencode


def cache_key(url: str, params: dict[str, str] | None = None) -> str:
    """Build a stable cache key from a URL and its query parameters."""
    if not params:
        return url
    return f"{url}?{urlencode(sorted(params.items()))}"


@dataclass
class CacheEntry:
    """Cache entry with TTL, timed on the monotonic clock."""

    key: str
    payload: Any
    ttl_seconds: int
    stored_at: float = field(default_factory=time.monotonic)

    def is_expired(self) -> bool:
        return time.monotonic() - self.stored_at >= self.ttl_seconds


class Cache:
    """In-memory TTL cache for upstream responses."""

    def __init__(self):
        self._store: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Optional[Any]:
        """
        Get cached payload if present and not expired.

        Args:
            key: Cache key

        Returns:
            Cached payload or None on miss/expiry
        """
        entry = self._store.get(key)
        if entry is None:
            return None

        if entry.is_expired():
            del self._store[key]
            return None

        return entry.payload

    def set(self, key: str, payload: Any, ttl_seconds: int) -> None:
        """Store a payload; a non-positive TTL is a no-op."""
        if ttl_seconds <= 0:
            return
        self._store[key] = CacheEntry(key=key, payload=payload, ttl_seconds=ttl_seconds)

    def clear(self) -> None:
        self._store.clear()

    def prune_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        expired_keys = [key for key, entry in self._store.items() if entry.is_expired()]
        for key in expired_keys:
            del self._store[key]
        return len(expired_keys)


_cache: Optional[Cache] = None


def get_cache() -> Cache:
    """Get or create the singleton cache instance."""
    global _cache
    if _cache is None:
        _cache = Cache()
    return _cache
