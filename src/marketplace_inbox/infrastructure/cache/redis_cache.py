"""Redis-backed query cache shared by every worker process."""
from __future__ import annotations

import logging
import re
from typing import Any

import redis.asyncio as aioredis

from marketplace_inbox.application.ports.cache import QueryKey
from marketplace_inbox.infrastructure.cache.serializer import (
    deserialize_value,
    encode_key,
    serialize_value,
)

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")

# Outlives any in-flight load by a wide margin.
GENERATION_TTL_SECONDS = 24 * 60 * 60


class RedisQueryCache:
    """Implements application.ports.cache.QueryCache."""

    def __init__(
        self,
        redis: aioredis.Redis,
        prefix: str,
        *,
        default_ttl: int | None = None,
    ) -> None:
        self._redis = redis
        self._prefix = prefix
        self._default_ttl = default_ttl

    def _name(self, key: QueryKey) -> str:
        return f"{self._prefix}:{encode_key(key)}"

    async def get(self, key: QueryKey) -> Any | None:
        raw = await self._redis.get(self._name(key))
        if raw is None:
            return None
        return deserialize_value(raw)

    async def set(self, key: QueryKey, value: Any, *, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        await self._redis.set(self._name(key), serialize_value(value), ex=ttl)

    def _generation_name(self, key: QueryKey) -> str:
        return f"{self._prefix}:~gen:{encode_key(key)}"

    async def invalidate(self, key: QueryKey) -> None:
        # Bump first so loads that race the delete below see the new generation
        gen_name = self._generation_name(key)
        await self._redis.incr(gen_name)
        await self._redis.expire(gen_name, GENERATION_TTL_SECONDS)

        name = self._name(key)
        pattern = _GLOB_SPECIAL.sub(r"\\\1", name) + "|*"
        names = [name]
        async for child in self._redis.scan_iter(match=pattern):
            names.append(child)
        await self._redis.delete(*names)
        logger.debug("Invalidated %d cache entries under %s", len(names), name)

    async def generation(self, key: QueryKey) -> int:
        names = [self._generation_name(key[:size]) for size in range(1, len(key) + 1)]
        counts = await self._redis.mget(names)
        return sum(int(c) for c in counts if c is not None)
