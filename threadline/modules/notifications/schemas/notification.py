from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class NotificationCreate(BaseModel):
    recipient_id: str
    sender_id: Optional[str] = None  # ID of the user who triggered the notification
    type: str
    post_id: Optional[str] = None
    content: Optional[str] = None

class NotificationSender(BaseModel):
    id: str
    username: str
    profile_picture: Optional[str] = ""

    model_config = ConfigDict(from_attributes=True)

class NotificationPost(BaseModel):
    id: str
    content: str

    model_config = ConfigDict(from_attributes=True)

class Notification(NotificationCreate):
    """Notification model returned to client"""
    id: str
    read: bool
    created_at: datetime
    sender: Optional[NotificationSender] = None
    post: Optional[NotificationPost] = None

    model_config = ConfigDict(from_attributes=True)

class UnreadCount(BaseModel):
    count: int
