from __future__ import annotations

import time
from typing import Any

from marketplace_inbox.application.ports.cache import QueryKey


class InMemoryQueryCache:
    """Process-local cache. Implements application.ports.cache.QueryCache."""

    def __init__(self, default_ttl: int | None = None) -> None:
        self._default_ttl = default_ttl
        self._entries: dict[QueryKey, tuple[Any, float | None]] = {}
        # Invalidation counts per invalidated key; a key's generation is the
        # sum over all of its prefixes.
        self._invalidations: dict[QueryKey, int] = {}

    async def get(self, key: QueryKey) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return value

    async def set(self, key: QueryKey, value: Any, *, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        expires_at = time.monotonic() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    async def invalidate(self, key: QueryKey) -> None:
        self._invalidations[key] = self._invalidations.get(key, 0) + 1
        size = len(key)
        for existing in [k for k in self._entries if k[:size] == key]:
            del self._entries[existing]

    async def generation(self, key: QueryKey) -> int:
        return sum(
            self._invalidations.get(key[:size], 0) for size in range(1, len(key) + 1)
        )

    def __len__(self) -> int:
        return len(self._entries)
