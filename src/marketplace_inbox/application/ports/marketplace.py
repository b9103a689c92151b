from __future__ import annotations

from typing import Any, Protocol

from marketplace_inbox.domain.value_objects.enums import UnauthorizedBehavior

JsonObject = dict[str, Any]


class MarketplaceApi(Protocol):
    """Upstream marketplace REST API, scoped to one viewer's session.

    Methods return decoded response bodies; parsing into entities is done by
    ``application.mappers`` so that cached bodies and fresh ones go through
    the same path.
    """

    async def get_current_user(
        self, *, on_401: UnauthorizedBehavior = UnauthorizedBehavior.RETURN_NULL,
    ) -> JsonObject | None: ...

    async def list_messages(self) -> list[JsonObject]: ...

    async def get_thread(self, business_id: int, other_user_id: int) -> list[JsonObject]: ...

    async def send_message(
        self, receiver_id: int, business_id: int, content: str,
    ) -> JsonObject: ...

    async def mark_message_read(self, message_id: int) -> None: ...

    async def list_notifications(self) -> list[JsonObject]: ...

    async def get_unread_notification_count(self) -> int: ...

    async def mark_notification_read(self, notification_id: int) -> None: ...

    async def mark_all_notifications_read(self) -> None: ...

    async def get_business(self, business_id: int) -> JsonObject: ...
