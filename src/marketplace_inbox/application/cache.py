"""Query keys and the read-through helper shared by all use cases.

Keys mirror the upstream path of the query so that invalidating a list key
also drops the detail keys below it (e.g. threads under the message list).
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

from marketplace_inbox.application.ports.cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)

T = TypeVar("T")

MESSAGES: QueryKey = ("/api/messages",)
NOTIFICATIONS: QueryKey = ("/api/notifications",)
UNREAD_NOTIFICATION_COUNT: QueryKey = ("/api/notifications/unread-count",)


def thread_key(business_id: int, other_user_id: int) -> QueryKey:
    return ("/api/messages", business_id, other_user_id)


def business_key(business_id: int) -> QueryKey:
    return ("/api/businesses", business_id)


async def cached_query(
    cache: QueryCache,
    key: QueryKey,
    loader: Callable[[], Awaitable[T]],
    *,
    ttl: int | None = None,
) -> T:
    """Return the cached result for ``key`` or load and store it.

    ``None`` results are never stored, and neither is a result whose key
    was invalidated while it was loading.
    """
    cached: Any = await cache.get(key)
    if cached is not None:
        return cached
    generation = await cache.generation(key)
    value = await loader()
    if value is None:
        return value
    if await cache.generation(key) != generation:
        logger.debug("Dropping stale result for %s", key)
        return value
    await cache.set(key, value, ttl=ttl)
    return value
