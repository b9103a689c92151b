"""Periodic refresh of the unread-notification badge."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine

logger = logging.getLogger(__name__)

OnCountCallback = Callable[[int], Coroutine[Any, Any, None]]


class UnreadCountPoller:
    """Background task that fetches the unread count every ``interval`` seconds."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[int]],
        callback: OnCountCallback,
        *,
        interval: float,
    ) -> None:
        self._fetch = fetch
        self._callback = callback
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        self._task = asyncio.create_task(self._poll(), name="unread-count-poller")
        logger.info("Unread count poller started (interval=%.1fs)", self._interval)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Unread count poller stopped")

    async def _poll(self) -> None:
        while True:
            try:
                count = await self._fetch()
                await self._callback(count)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Unread count poll failed, retrying in %.1fs", self._interval)
            await asyncio.sleep(self._interval)
