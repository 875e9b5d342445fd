from typing import List, Optional
import uuid
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from threadline.modules.posts.models.post import Post
from threadline.modules.posts.reposts.models.repost import Repost
from threadline.modules.notifications.services.notification_events import create_repost_notification

logger = logging.getLogger(__name__)

def get_repost(db: Session, reposter_id: str, post_id: str) -> Optional[Repost]:
    """Get the user's repost of a post"""
    return db.query(Repost).filter(
        Repost.reposter_id == reposter_id,
        Repost.original_post_id == post_id,
    ).first()

def count_reposts(db: Session, post_id: str) -> int:
    return db.query(func.count(Repost.id)).filter(Repost.original_post_id == post_id).scalar() or 0

def get_reposts(db: Session, reposter_ids: Optional[List[str]] = None) -> List[Repost]:
    """Reposts newest first with reposter and original post (and its author) loaded"""
    query = db.query(Repost).options(
        joinedload(Repost.reposter),
        joinedload(Repost.original_post).joinedload(Post.author),
    )
    if reposter_ids is not None:
        query = query.filter(Repost.reposter_id.in_(reposter_ids))
    return query.order_by(Repost.created_at.desc()).all()

def toggle_repost(db: Session, post: Post, user_id: str) -> bool:
    """Create the user's repost of post, or remove it if it exists; returns the new state"""
    existing_repost = get_repost(db, user_id, post.id)

    if existing_repost:
        db.delete(existing_repost)
        db.commit()
        logger.info(f"User {user_id} removed repost of {post.id}")
        return False

    db.add(Repost(
        id=str(uuid.uuid4()),
        reposter_id=user_id,
        original_post_id=post.id,
    ))
    db.commit()
    logger.info(f"User {user_id} reposted {post.id}")

    create_repost_notification(db, post, user_id)
    return True

def get_orphaned_reposts(db: Session) -> List[Repost]:
    """Reposts whose original post is unset or no longer exists"""
    return (
        db.query(Repost)
        .outerjoin(Post, Post.id == Repost.original_post_id)
        .filter(Post.id.is_(None))
        .all()
    )

def delete_orphaned_reposts(db: Session) -> int:
    orphans = get_orphaned_reposts(db)
    for repost in orphans:
        db.delete(repost)
    db.commit()
    return len(orphans)
