from __future__ import annotations

from fastapi import APIRouter

from marketplace_inbox.api.deps import ContextDep, CurrentViewer
from marketplace_inbox.api.v1.schemas.conversation import ConversationResponse, ThreadResponse
from marketplace_inbox.api.v1.schemas.message import MessageResponse
from marketplace_inbox.config import settings
from marketplace_inbox.services import inbox_service, read_state_service

router = APIRouter(prefix="/api/v1/inbox/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> list[ConversationResponse]:
    convs = await inbox_service.list_conversations(
        viewer,
        ctx,
        placeholder_name=settings.BUSINESS_NAME_PLACEHOLDER,
        name_lookup_timeout=settings.BUSINESS_LOOKUP_TIMEOUT_SECONDS,
    )
    return [ConversationResponse.model_validate(c, from_attributes=True) for c in convs]


@router.get("/{business_id}/{other_user_id}", response_model=ThreadResponse)
async def open_thread(
    business_id: int,
    other_user_id: int,
    viewer: CurrentViewer,
    ctx: ContextDep,
) -> ThreadResponse:
    thread = await read_state_service.open_thread(viewer, business_id, other_user_id, ctx)
    return ThreadResponse(
        business_id=thread.business_id,
        other_user_id=thread.other_user_id,
        messages=[MessageResponse.model_validate(m, from_attributes=True) for m in thread.messages],
        marked_read=thread.read_marks.marked,
        failed_to_mark=thread.read_marks.failed,
    )
