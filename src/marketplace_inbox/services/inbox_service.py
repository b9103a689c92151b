from __future__ import annotations

import logging

from marketplace_inbox.application import cache as keys
from marketplace_inbox.application import mappers
from marketplace_inbox.application.aggregation import (
    aggregate_conversations,
    resolve_business_names,
)
from marketplace_inbox.application.cache import cached_query
from marketplace_inbox.application.context import InboxContext
from marketplace_inbox.application.exceptions import ValidationError
from marketplace_inbox.domain.entities.business import Business
from marketplace_inbox.domain.entities.conversation import Conversation
from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.entities.user import User

logger = logging.getLogger(__name__)


async def get_business(business_id: int, ctx: InboxContext) -> Business:
    body = await cached_query(
        ctx.cache, keys.business_key(business_id),
        lambda: ctx.api.get_business(business_id),
    )
    return mappers.payload_to_business(body)


async def list_conversations(
    viewer: User,
    ctx: InboxContext,
    *,
    placeholder_name: str = "Business",
    name_lookup_timeout: float = 2.0,
) -> list[Conversation]:
    """Aggregate the viewer's message log into conversation summaries."""
    body = await cached_query(ctx.cache, keys.MESSAGES, ctx.api.list_messages)
    messages = [mappers.payload_to_message(m) for m in body]
    conversations = aggregate_conversations(
        messages, viewer.id, placeholder_name=placeholder_name,
    )

    async def _business_name(business_id: int) -> str:
        return (await get_business(business_id, ctx)).name

    await resolve_business_names(
        conversations,
        _business_name,
        timeout=name_lookup_timeout,
        tasks=ctx.tasks,
    )
    return conversations


async def send_message(
    viewer: User,
    receiver_id: int,
    business_id: int,
    content: str,
    ctx: InboxContext,
) -> Message:
    if not content.strip():
        raise ValidationError("Message content must not be empty")

    body = await ctx.api.send_message(receiver_id, business_id, content)
    # Prefix invalidation: drops every cached thread as well
    await ctx.cache.invalidate(keys.MESSAGES)

    logger.info(
        "User %d sent a message to user %d about business %d",
        viewer.id, receiver_id, business_id,
    )
    return mappers.payload_to_message(body)


async def contact_business(
    viewer: User,
    business_id: int,
    content: str,
    ctx: InboxContext,
) -> Message:
    """Send a message to the owner of ``business_id``."""
    business = await get_business(business_id, ctx)
    if business.owner_id == viewer.id:
        raise ValidationError("You cannot send a message to your own business")
    return await send_message(viewer, business.owner_id, business.id, content, ctx)
