"""Conversation summaries derived from the flat message log.

``aggregate_conversations`` is pure; ``resolve_business_names`` runs after
it and only fills in display names, never the order.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable

from marketplace_inbox.application.ports.tasks import TaskSpawner
from marketplace_inbox.domain.entities.conversation import Conversation, ConversationKey
from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.value_objects.ids import BusinessId, UserId

logger = logging.getLogger(__name__)

BusinessNameLookup = Callable[[int], Awaitable[str]]


def aggregate_conversations(
    messages: Iterable[Message],
    current_user_id: int,
    *,
    placeholder_name: str = "Business",
) -> list[Conversation]:
    """Group messages by (counterparty, business), most recently active first.

    Messages the viewer sent to themselves are dropped.
    """
    groups: dict[ConversationKey, Conversation] = {}

    for message in messages:
        if message.sender_id == current_user_id and message.receiver_id == current_user_id:
            continue

        key = (UserId(message.counterparty_of(current_user_id)), BusinessId(message.business_id))
        unread = 1 if message.is_unread_for(current_user_id) else 0

        conversation = groups.get(key)
        if conversation is None:
            groups[key] = Conversation(
                counterparty_id=key[0],
                business_id=key[1],
                business_name=placeholder_name,
                last_message=message,
                unread_count=unread,
            )
            continue

        # Strictly newer only: ties keep the first message seen
        if message.created_at > conversation.last_message.created_at:
            conversation.last_message = message
        conversation.unread_count += unread

    return sorted(
        groups.values(),
        key=lambda c: c.last_message.created_at,
        reverse=True,
    )


async def resolve_business_names(
    conversations: list[Conversation],
    lookup: BusinessNameLookup,
    *,
    timeout: float,
    tasks: TaskSpawner,
) -> None:
    """Assign business names in place, one lookup per distinct business.

    A failed lookup leaves the placeholder. Lookups still running after
    ``timeout`` are handed to ``tasks`` and finish in the background.
    """
    business_ids = {c.business_id for c in conversations}
    if not business_ids:
        return

    async def _lookup_name(business_id: int) -> str | None:
        # Failures log the same way whether or not the request still waits
        try:
            return await lookup(business_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to resolve name of business %d: %s", business_id, exc)
            return None

    pending_by_id = {
        business_id: asyncio.create_task(
            _lookup_name(business_id), name=f"business-name-{business_id}",
        )
        for business_id in business_ids
    }
    try:
        _done, pending = await asyncio.wait(pending_by_id.values(), timeout=timeout)
    except asyncio.CancelledError:
        for task in pending_by_id.values():
            if not task.done():
                tasks.adopt(task)
        raise

    names: dict[int, str] = {}
    for business_id, task in pending_by_id.items():
        if task in pending:
            logger.debug("Business %d name lookup still running, keeping placeholder", business_id)
            tasks.adopt(task)
            continue
        name = task.result()
        if name:
            names[business_id] = name

    for conversation in conversations:
        name = names.get(conversation.business_id)
        if name:
            conversation.business_name = name
