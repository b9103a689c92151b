from __future__ import annotations

from dataclasses import dataclass

from marketplace_inbox.domain.entities.notification import Notification


@dataclass(frozen=True, slots=True)
class NotificationOpenResult:
    notification: Notification
    destination: str | None  # None means stay on the current view
