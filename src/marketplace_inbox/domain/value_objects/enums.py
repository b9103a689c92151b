from __future__ import annotations

from enum import StrEnum


class NotificationType(StrEnum):
    MESSAGE = "message"
    LIKE = "like"
    COMMENT = "comment"
    SUBSCRIPTION = "subscription"


class UnauthorizedBehavior(StrEnum):
    """What an upstream call does when the session is missing or expired."""

    RAISE = "raise"
    RETURN_NULL = "return_null"
