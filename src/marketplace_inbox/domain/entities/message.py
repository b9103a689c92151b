from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    sender_id: int
    receiver_id: int
    business_id: int
    content: str
    is_read: bool
    created_at: datetime

    def counterparty_of(self, user_id: int) -> int:
        """Return the participant that is not ``user_id``."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def is_unread_for(self, user_id: int) -> bool:
        return self.receiver_id == user_id and not self.is_read
