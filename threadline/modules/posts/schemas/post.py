from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from threadline.modules.user_management.schemas.user import UserSummary
from threadline.modules.posts.reposts.schemas.repost import RepostWithReposter

class PostCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Post content is required")
        return v

class Post(BaseModel):
    """Post model returned to client"""
    id: str
    content: str
    author_id: str
    likes: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("likes", mode="before")
    @classmethod
    def normalize_likes(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            return []
        return [str(user_id) for user_id in v]

class PostWithAuthor(Post):
    author: Optional[UserSummary] = None

class PostDetail(PostWithAuthor):
    """Post with its author and every repost of it"""
    reposts: List[RepostWithReposter] = []

class LikeToggle(BaseModel):
    post: Post
    likes_count: int
    liked: bool
