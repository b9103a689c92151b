"""Upstream (camelCase JSON) → domain entities."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from marketplace_inbox.domain.entities.business import Business
from marketplace_inbox.domain.entities.message import Message
from marketplace_inbox.domain.entities.notification import Notification
from marketplace_inbox.domain.entities.user import User


def parse_timestamp(raw: str | datetime) -> datetime:
    ts = raw if isinstance(raw, datetime) else datetime.fromisoformat(raw)
    # Upstream timestamps without an offset are UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def payload_to_message(data: dict[str, Any]) -> Message:
    return Message(
        id=int(data["id"]),
        sender_id=int(data["senderId"]),
        receiver_id=int(data["receiverId"]),
        business_id=int(data["businessId"]),
        content=data.get("content") or "",
        is_read=bool(data.get("isRead", False)),
        created_at=parse_timestamp(data["createdAt"]),
    )


def payload_to_notification(data: dict[str, Any]) -> Notification:
    related = data.get("relatedId")
    return Notification(
        id=int(data["id"]),
        user_id=int(data["userId"]),
        type=str(data["type"]),
        content=data.get("content") or "",
        related_id=int(related) if related is not None else None,
        is_read=bool(data.get("isRead", False)),
        created_at=parse_timestamp(data["createdAt"]),
    )


def payload_to_business(data: dict[str, Any]) -> Business:
    return Business(
        id=int(data["id"]),
        owner_id=int(data["ownerId"]),
        name=data["name"],
    )


def payload_to_user(data: dict[str, Any]) -> User:
    return User(
        id=int(data["id"]),
        username=data["username"],
        name=data.get("name"),
        email=data.get("email"),
        avatar=data.get("avatar"),
    )
