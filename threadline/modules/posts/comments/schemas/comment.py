from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from threadline.modules.user_management.schemas.user import UserSummary

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment content is required")
        return v

class Comment(BaseModel):
    """Comment model returned to client"""
    id: str
    content: str
    author_id: str
    post_id: str
    created_at: datetime
    updated_at: datetime
    author: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)
