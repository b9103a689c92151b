from __future__ import annotations

import asyncio
import logging

from marketplace_inbox.application import cache as keys
from marketplace_inbox.application import mappers
from marketplace_inbox.application.cache import cached_query
from marketplace_inbox.application.context import InboxContext
from marketplace_inbox.application.dto.thread import ReadMarkResult, ThreadView
from marketplace_inbox.application.exceptions import AppError, AuthenticationError
from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.entities.user import User

logger = logging.getLogger(__name__)


async def get_thread(
    business_id: int,
    other_user_id: int,
    ctx: InboxContext,
) -> list[Message]:
    body = await cached_query(
        ctx.cache,
        keys.thread_key(business_id, other_user_id),
        lambda: ctx.api.get_thread(business_id, other_user_id),
    )
    return [mappers.payload_to_message(m) for m in body]


async def mark_thread_read(
    viewer: User,
    business_id: int,
    other_user_id: int,
    messages: list[Message],
    ctx: InboxContext,
) -> ReadMarkResult:
    """Mark every message addressed to the viewer as read.

    Requests run concurrently. A failed request is logged and left for the
    next refetch to reveal; the caches are invalidated in every case.
    """
    unread = [m for m in messages if m.is_unread_for(viewer.id)]
    if not unread:
        return ReadMarkResult()

    outcomes = await asyncio.gather(
        *(ctx.api.mark_message_read(m.id) for m in unread),
        return_exceptions=True,
    )

    marked: list[int] = []
    failed: list[int] = []
    for message, outcome in zip(unread, outcomes):
        # An expired session is not a per-message failure
        fatal = isinstance(outcome, AuthenticationError) or (
            isinstance(outcome, BaseException) and not isinstance(outcome, AppError)
        )
        if fatal:
            await _invalidate_thread(business_id, other_user_id, ctx)
            raise outcome
        if isinstance(outcome, AppError):
            logger.warning("Failed to mark message %d as read: %s", message.id, outcome.detail)
            failed.append(message.id)
        else:
            marked.append(message.id)

    await _invalidate_thread(business_id, other_user_id, ctx)
    return ReadMarkResult(marked=marked, failed=failed)


async def open_thread(
    viewer: User,
    business_id: int,
    other_user_id: int,
    ctx: InboxContext,
) -> ThreadView:
    """Fetch a thread and mark what the viewer has not read yet."""
    messages = await get_thread(business_id, other_user_id, ctx)
    read_marks = await mark_thread_read(viewer, business_id, other_user_id, messages, ctx)
    if read_marks.attempted:
        messages = await get_thread(business_id, other_user_id, ctx)
    return ThreadView(
        business_id=business_id,
        other_user_id=other_user_id,
        messages=messages,
        read_marks=read_marks,
    )


async def _invalidate_thread(business_id: int, other_user_id: int, ctx: InboxContext) -> None:
    await ctx.cache.invalidate(keys.MESSAGES)
    await ctx.cache.invalidate(keys.thread_key(business_id, other_user_id))
