from __future__ import annotations

from typing import Any, Hashable, Protocol

QueryKey = tuple[Hashable, ...]


class QueryCache(Protocol):
    """Cache of fetched query results keyed by query identity.

    ``invalidate`` drops the key itself and every key it is a prefix of.
    ``generation`` changes whenever an invalidation reaches ``key``, so a
    load that started before it can tell its result is stale.
    """

    async def get(self, key: QueryKey) -> Any | None: ...

    async def set(self, key: QueryKey, value: Any, *, ttl: int | None = None) -> None: ...

    async def invalidate(self, key: QueryKey) -> None: ...

    async def generation(self, key: QueryKey) -> int: ...
