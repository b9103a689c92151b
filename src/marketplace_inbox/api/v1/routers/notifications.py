from __future__ import annotations

from fastapi import APIRouter, Response, status

from marketplace_inbox.api.deps import ContextDep, CurrentViewer
from marketplace_inbox.api.v1.schemas.notification import (
    NotificationOpenResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from marketplace_inbox.config import settings
from marketplace_inbox.services import notification_service

router = APIRouter(prefix="/api/v1/inbox/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> list[NotificationResponse]:
    notifications = await notification_service.list_notifications(ctx)
    return [NotificationResponse.model_validate(n, from_attributes=True) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(ctx: ContextDep) -> UnreadCountResponse:
    # Polled by every open page: no viewer lookup, upstream answers 401 itself
    count = await notification_service.unread_count(
        ctx, ttl=settings.NOTIFICATION_POLL_SECONDS,
    )
    return UnreadCountResponse(count=count)


@router.post("/mark-all-read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_read(viewer: CurrentViewer, ctx: ContextDep) -> Response:
    await notification_service.mark_all_read(ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/open", response_model=NotificationOpenResponse)
async def open_notification(
    notification_id: int,
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> NotificationOpenResponse:
    result = await notification_service.open_notification(notification_id, ctx)
    return NotificationOpenResponse(
        notification_id=result.notification.id,
        destination=result.destination,
    )
