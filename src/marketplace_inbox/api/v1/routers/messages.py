from __future__ import annotations

from fastapi import APIRouter

from marketplace_inbox.api.deps import ContextDep, CurrentViewer
from marketplace_inbox.api.v1.schemas.message import (
    ContactBusinessRequest,
    MessageResponse,
    SendMessageRequest,
)
from marketplace_inbox.services import inbox_service

router = APIRouter(prefix="/api/v1/inbox", tags=["messages"])


@router.post("/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> MessageResponse:
    msg = await inbox_service.send_message(
        viewer, body.receiver_id, body.business_id, body.content, ctx,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.post(
    "/businesses/{business_id}/contact",
    response_model=MessageResponse,
    status_code=201,
)
async def contact_business(
    business_id: int,
    body: ContactBusinessRequest,
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> MessageResponse:
    msg = await inbox_service.contact_business(viewer, business_id, body.content, ctx)
    return MessageResponse.model_validate(msg, from_attributes=True)
