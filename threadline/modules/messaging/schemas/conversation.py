from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from threadline.modules.user_management.schemas.user import UserSummary

class ConversationCreate(BaseModel):
    user_id: str

class Message(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class Conversation(BaseModel):
    id: str
    user1_id: str
    user2_id: str
    created_at: datetime
    updated_at: datetime
    user1: Optional[UserSummary] = None
    user2: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)

class ConversationSummary(Conversation):
    """Conversation list entry with the latest message and the caller's unread count"""
    last_message: Optional[Message] = None
    unread_count: int = 0

# Socket event payloads

class StartConversationPayload(BaseModel):
    user1_id: str
    user2_id: str

class SendMessagePayload(BaseModel):
    conversation_id: str
    sender_id: str
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message content is required")
        return v
