from __future__ import annotations

import logging

from marketplace_inbox.application import cache as keys
from marketplace_inbox.application import mappers
from marketplace_inbox.application.cache import cached_query
from marketplace_inbox.application.context import InboxContext
from marketplace_inbox.application.dto.notification import NotificationOpenResult
from marketplace_inbox.application.exceptions import AppError, NotFoundError
from marketplace_inbox.domain.entities.notification import Notification
from marketplace_inbox.domain.value_objects.enums import NotificationType

logger = logging.getLogger(__name__)

_BUSINESS_PAGE_TYPES = frozenset(
    t.value
    for t in (NotificationType.LIKE, NotificationType.COMMENT, NotificationType.SUBSCRIPTION)
)


def resolve_destination(notification: Notification) -> str | None:
    """Route a notification opens, or None to stay on the current view."""
    if notification.related_id is None:
        return None
    if notification.type == NotificationType.MESSAGE:
        return "/messages"
    if notification.type in _BUSINESS_PAGE_TYPES:
        return f"/business/{notification.related_id}"
    return None


async def unread_count(ctx: InboxContext, *, ttl: int | None = None) -> int:
    return await cached_query(
        ctx.cache,
        keys.UNREAD_NOTIFICATION_COUNT,
        ctx.api.get_unread_notification_count,
        ttl=ttl,
    )


async def refresh_unread_count(ctx: InboxContext, *, ttl: int | None = None) -> int:
    await ctx.cache.invalidate(keys.UNREAD_NOTIFICATION_COUNT)
    return await unread_count(ctx, ttl=ttl)


async def list_notifications(ctx: InboxContext) -> list[Notification]:
    body = await cached_query(ctx.cache, keys.NOTIFICATIONS, ctx.api.list_notifications)
    return [mappers.payload_to_notification(n) for n in body]


async def open_notification(
    notification_id: int,
    ctx: InboxContext,
) -> NotificationOpenResult:
    """Resolve where a notification leads; mark it read in the background."""
    notifications = await list_notifications(ctx)
    notification = next((n for n in notifications if n.id == notification_id), None)
    if notification is None:
        raise NotFoundError("Notification not found")

    if not notification.is_read:
        ctx.tasks.spawn(
            _mark_read_best_effort(notification.id, ctx),
            name=f"mark-notification-read-{notification.id}",
        )

    return NotificationOpenResult(
        notification=notification,
        destination=resolve_destination(notification),
    )


async def mark_all_read(ctx: InboxContext) -> None:
    """Single bulk request; failure is logged and otherwise ignored."""
    try:
        await ctx.api.mark_all_notifications_read()
    except AppError as exc:
        logger.warning("Failed to mark notifications as read: %s", exc.detail)
    await _invalidate_notifications(ctx)


async def _mark_read_best_effort(notification_id: int, ctx: InboxContext) -> None:
    try:
        await ctx.api.mark_notification_read(notification_id)
    except AppError as exc:
        logger.warning("Failed to mark notification %d as read: %s", notification_id, exc.detail)
    await _invalidate_notifications(ctx)


async def _invalidate_notifications(ctx: InboxContext) -> None:
    await ctx.cache.invalidate(keys.NOTIFICATIONS)
    await ctx.cache.invalidate(keys.UNREAD_NOTIFICATION_COUNT)
