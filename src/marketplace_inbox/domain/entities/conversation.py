from __future__ import annotations

from dataclasses import dataclass

from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.value_objects.ids import BusinessId, UserId

ConversationKey = tuple[UserId, BusinessId]


@dataclass(slots=True)
class Conversation:
    """View-model rebuilt from the message list on every fetch.

    Not frozen: ``business_name`` is filled in after grouping.
    """

    counterparty_id: int
    business_id: int
    business_name: str
    last_message: Message
    unread_count: int = 0

    @property
    def key(self) -> ConversationKey:
        return UserId(self.counterparty_id), BusinessId(self.business_id)
