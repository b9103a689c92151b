from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    receiver_id: int
    business_id: int
    content: str


class ContactBusinessRequest(BaseModel):
    content: str


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    business_id: int
    content: str
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}
