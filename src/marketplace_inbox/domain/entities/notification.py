from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    user_id: int
    type: str  # NotificationType value; unknown types are kept as-is
    content: str
    related_id: int | None
    is_read: bool
    created_at: datetime
