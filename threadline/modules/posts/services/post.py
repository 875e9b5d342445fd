from typing import List, Optional, Tuple
import uuid
import logging
from sqlalchemy.orm import Session, joinedload, selectinload

from threadline.modules.posts.models.post import Post
from threadline.modules.posts.reposts.models.repost import Repost
from threadline.modules.posts.schemas.post import PostCreate
from threadline.modules.notifications.services.notification import delete_post_notifications
from threadline.modules.notifications.services.notification_events import create_like_notification

logger = logging.getLogger(__name__)

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_posts(db: Session, author_ids: Optional[List[str]] = None) -> List[Post]:
    """Posts newest first with authors and reposts loaded, optionally limited to some authors"""
    query = db.query(Post).options(
        joinedload(Post.author),
        selectinload(Post.reposts).joinedload(Repost.reposter),
    )
    if author_ids is not None:
        query = query.filter(Post.author_id.in_(author_ids))
    return query.order_by(Post.created_at.desc()).all()

def create_post(db: Session, post_in: PostCreate, author_id: str) -> Post:
    """Create new post"""
    logger.info(f"Creating post for author ID: {author_id}")
    post = Post(
        id=str(uuid.uuid4()),
        author_id=author_id,
        content=post_in.content,
        likes=[],
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def delete_post(db: Session, post: Post) -> Post:
    """
    Delete post together with its comments, reposts and notifications
    """
    logger.info(f"Deleting post with ID: {post.id}")
    delete_post_notifications(db, post.id)
    # Comments and reposts go through the relationship cascades
    db.delete(post)
    db.commit()
    return post

def toggle_like(db: Session, post: Post, user_id: str) -> Tuple[Post, bool]:
    """
    Add or remove user_id in the post's like list and return (post, liked).

    The list is read, changed and written back whole; concurrent toggles on the
    same post are last-writer-wins.
    """
    likes = [str(liker_id) for liker_id in (post.likes or [])]
    user_id = str(user_id)
    was_liked = user_id in likes

    if was_liked:
        likes = [liker_id for liker_id in likes if liker_id != user_id]
    else:
        likes.append(user_id)

    # Assign a new list so the JSON column is flagged as changed
    post.likes = likes
    db.commit()
    db.refresh(post)

    if not was_liked:
        create_like_notification(db, post, user_id)

    return post, not was_liked
