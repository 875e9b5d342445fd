from typing import Literal, Union
from datetime import datetime
from pydantic import BaseModel

from threadline.modules.posts.schemas.post import PostDetail, PostWithAuthor
from threadline.modules.posts.reposts.schemas.repost import RepostWithReposter

class FeedRepost(RepostWithReposter):
    """Repost together with the post it points at"""
    original_post: PostWithAuthor

class FeedItem(BaseModel):
    """Feed item model returned to client"""
    type: Literal["post", "repost"]
    created_at: datetime
    data: Union[PostDetail, FeedRepost]
