from __future__ import annotations

import hashlib
from typing import Any

from marketplace_inbox.application.ports.cache import QueryCache, QueryKey


def scope_for_session(session_cookie: str) -> str:
    """Stable, non-reversible cache scope for one upstream session."""
    return hashlib.sha256(session_cookie.encode()).hexdigest()[:32]


class ScopedQueryCache:
    """Prefixes every key with a per-viewer scope."""

    def __init__(self, inner: QueryCache, scope: str) -> None:
        self._inner = inner
        self._scope = scope

    async def get(self, key: QueryKey) -> Any | None:
        return await self._inner.get((self._scope, *key))

    async def set(self, key: QueryKey, value: Any, *, ttl: int | None = None) -> None:
        await self._inner.set((self._scope, *key), value, ttl=ttl)

    async def invalidate(self, key: QueryKey) -> None:
        await self._inner.invalidate((self._scope, *key))

    async def generation(self, key: QueryKey) -> int:
        return await self._inner.generation((self._scope, *key))
