"""Log the unread-notification badge count for one session until interrupted."""
from __future__ import annotations

import asyncio
import logging

from marketplace_inbox.config import settings
from marketplace_inbox.infrastructure.background import BackgroundTasks
from marketplace_inbox.infrastructure.cache.memory import InMemoryQueryCache
from marketplace_inbox.infrastructure.context import RequestContext
from marketplace_inbox.infrastructure.http.marketplace_client import (
    MarketplaceApiClient,
    create_http_client,
)
from marketplace_inbox.infrastructure.poller import UnreadCountPoller
from marketplace_inbox.services import notification_service

logger = logging.getLogger(__name__)


async def _log_count(count: int) -> None:
    logger.info("Unread notifications: %d", count)


async def watch(session_cookie: str) -> None:
    http = create_http_client(settings.MARKETPLACE_API_URL, settings.HTTP_TIMEOUT_SECONDS)
    ctx = RequestContext(
        api=MarketplaceApiClient(http, session_cookie, cookie_name=settings.SESSION_COOKIE_NAME),
        cache=InMemoryQueryCache(),
        tasks=BackgroundTasks(),
    )
    poller = UnreadCountPoller(
        lambda: notification_service.refresh_unread_count(ctx),
        _log_count,
        interval=settings.NOTIFICATION_POLL_SECONDS,
    )
    await poller.start()
    try:
        await asyncio.Event().wait()
    finally:
        await poller.stop()
        await http.aclose()


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not settings.WATCH_SESSION_COOKIE:
        raise SystemExit("WATCH_SESSION_COOKIE must be set")
    try:
        asyncio.run(watch(settings.WATCH_SESSION_COOKIE))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
