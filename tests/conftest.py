"""Shared test fixtures."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from marketplace_inbox.application.exceptions import NotFoundError, UpstreamUnavailableError
from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.entities.user import User
from marketplace_inbox.domain.value_objects.enums import UnauthorizedBehavior
from marketplace_inbox.infrastructure.background import BackgroundTasks
from marketplace_inbox.infrastructure.cache.memory import InMemoryQueryCache

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def viewer() -> User:
    return User(id=1, username="alice", name="Alice")


def user_payload(user_id: int = 1, username: str = "alice") -> dict[str, Any]:
    return {"id": user_id, "username": username, "name": username.title(), "email": None, "avatar": None}


def message_payload(
    message_id: int,
    *,
    sender: int,
    receiver: int,
    business: int = 5,
    is_read: bool = False,
    minutes: int = 0,
    content: str = "hello",
) -> dict[str, Any]:
    return {
        "id": message_id,
        "senderId": sender,
        "receiverId": receiver,
        "businessId": business,
        "content": content,
        "isRead": is_read,
        "createdAt": at(minutes).isoformat().replace("+00:00", "Z"),
    }


def notification_payload(
    notification_id: int,
    *,
    type: str = "like",
    related_id: int | None = 5,
    is_read: bool = False,
    minutes: int = 0,
) -> dict[str, Any]:
    return {
        "id": notification_id,
        "userId": 1,
        "type": type,
        "content": f"{type} notification",
        "relatedId": related_id,
        "isRead": is_read,
        "createdAt": at(minutes).isoformat(),
    }


def make_message(
    message_id: int,
    *,
    sender: int,
    receiver: int,
    business: int = 5,
    is_read: bool = False,
    minutes: int = 0,
) -> Message:
    return Message(
        id=message_id,
        sender_id=sender,
        receiver_id=receiver,
        business_id=business,
        content="hello",
        is_read=is_read,
        created_at=at(minutes),
    )


@dataclass
class FakeMarketplaceApi:
    """In-memory upstream marketplace for one viewer."""

    me: dict[str, Any] | None = field(default_factory=user_payload)
    messages: list[dict[str, Any]] = field(default_factory=list)
    notifications: list[dict[str, Any]] = field(default_factory=list)
    businesses: dict[int, dict[str, Any]] = field(default_factory=dict)
    fail_mark_read_once: set[int] = field(default_factory=set)
    fail_mark_all: bool = False
    slow_businesses: dict[int, asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == name]

    @property
    def _me_id(self) -> int:
        return int(self.me["id"]) if self.me else 0

    async def get_current_user(
        self, *, on_401: UnauthorizedBehavior = UnauthorizedBehavior.RETURN_NULL,
    ) -> dict[str, Any] | None:
        self.calls.append(("get_current_user",))
        return dict(self.me) if self.me else None

    async def list_messages(self) -> list[dict[str, Any]]:
        self.calls.append(("list_messages",))
        return [
            dict(m) for m in self.messages
            if self._me_id in (m["senderId"], m["receiverId"])
        ]

    async def get_thread(self, business_id: int, other_user_id: int) -> list[dict[str, Any]]:
        self.calls.append(("get_thread", business_id, other_user_id))
        parties = {self._me_id, other_user_id}
        thread = [
            dict(m) for m in self.messages
            if m["businessId"] == business_id and {m["senderId"], m["receiverId"]} == parties
        ]
        return sorted(thread, key=lambda m: m["createdAt"])

    async def send_message(self, receiver_id: int, business_id: int, content: str) -> dict[str, Any]:
        self.calls.append(("send_message", receiver_id, business_id, content))
        new_id = max((m["id"] for m in self.messages), default=0) + 1
        payload = message_payload(
            new_id, sender=self._me_id, receiver=receiver_id, business=business_id,
            minutes=60, content=content,
        )
        self.messages.append(payload)
        return dict(payload)

    async def mark_message_read(self, message_id: int) -> None:
        self.calls.append(("mark_message_read", message_id))
        if message_id in self.fail_mark_read_once:
            self.fail_mark_read_once.discard(message_id)
            raise UpstreamUnavailableError()
        for m in self.messages:
            if m["id"] == message_id:
                m["isRead"] = True

    async def list_notifications(self) -> list[dict[str, Any]]:
        self.calls.append(("list_notifications",))
        return [dict(n) for n in self.notifications]

    async def get_unread_notification_count(self) -> int:
        self.calls.append(("get_unread_notification_count",))
        return sum(1 for n in self.notifications if not n["isRead"])

    async def mark_notification_read(self, notification_id: int) -> None:
        self.calls.append(("mark_notification_read", notification_id))
        for n in self.notifications:
            if n["id"] == notification_id:
                n["isRead"] = True

    async def mark_all_notifications_read(self) -> None:
        self.calls.append(("mark_all_notifications_read",))
        if self.fail_mark_all:
            raise UpstreamUnavailableError()
        for n in self.notifications:
            n["isRead"] = True

    async def get_business(self, business_id: int) -> dict[str, Any]:
        self.calls.append(("get_business", business_id))
        if business_id in self.slow_businesses:
            await self.slow_businesses[business_id].wait()
        business = self.businesses.get(business_id)
        if business is None:
            raise NotFoundError("Business not found")
        return dict(business)


@dataclass
class FakeContext:
    """In-memory InboxContext for unit tests."""

    api: FakeMarketplaceApi = field(default_factory=FakeMarketplaceApi)
    cache: InMemoryQueryCache = field(default_factory=InMemoryQueryCache)
    tasks: BackgroundTasks = field(default_factory=BackgroundTasks)


def business_payload(business_id: int, name: str, owner_id: int = 2) -> dict[str, Any]:
    return {"id": business_id, "ownerId": owner_id, "name": name, "city": "Austin", "state": "TX"}
