from typing import List, Optional
from sqlalchemy.orm import Session

from threadline.modules.home_feed.schemas.feed import FeedItem, FeedRepost
from threadline.modules.posts.schemas.post import PostDetail
from threadline.modules.posts.services.post import get_posts
from threadline.modules.posts.reposts.services.repost import get_reposts
from threadline.modules.follows.services.follow import get_following_ids

def build_feed(db: Session, author_ids: Optional[List[str]] = None) -> List[FeedItem]:
    """
    Merge posts and reposts into one list ordered by item timestamp, newest first.

    Both lists are fetched whole and sorted once in memory. Reposts whose
    original post no longer exists are dropped.
    """
    items = [
        FeedItem(type="post", created_at=post.created_at, data=PostDetail.model_validate(post))
        for post in get_posts(db, author_ids=author_ids)
    ]
    items.extend(
        FeedItem(type="repost", created_at=repost.created_at, data=FeedRepost.model_validate(repost))
        for repost in get_reposts(db, reposter_ids=author_ids)
        if repost.original_post is not None
    )
    items.sort(key=lambda item: item.created_at, reverse=True)
    return items

def get_following_feed(db: Session, user_id: str) -> List[FeedItem]:
    """Posts and reposts by the users user_id follows"""
    return build_feed(db, author_ids=get_following_ids(db, user_id))

def get_user_feed(db: Session, user_id: str) -> List[FeedItem]:
    """A single user's posts and reposts, as shown on their profile"""
    return build_feed(db, author_ids=[user_id])
