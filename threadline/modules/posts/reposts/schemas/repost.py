from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from threadline.modules.user_management.schemas.user import UserSummary

class Repost(BaseModel):
    id: str
    reposter_id: str
    original_post_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class RepostWithReposter(Repost):
    reposter: Optional[UserSummary] = None

class RepostToggle(BaseModel):
    message: str
    reposted: bool

class RepostCheck(BaseModel):
    reposted: bool

class RepostCount(BaseModel):
    count: int
