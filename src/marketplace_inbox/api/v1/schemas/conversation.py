from __future__ import annotations

from pydantic import BaseModel

from marketplace_inbox.api.v1.schemas.message import MessageResponse


class ConversationResponse(BaseModel):
    counterparty_id: int
    business_id: int
    business_name: str
    last_message: MessageResponse
    unread_count: int

    model_config = {"from_attributes": True}


class ThreadResponse(BaseModel):
    business_id: int
    other_user_id: int
    messages: list[MessageResponse]
    marked_read: list[int]
    failed_to_mark: list[int]
