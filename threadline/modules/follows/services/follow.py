from typing import List
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from threadline.modules.follows.models.follow import Follow
from threadline.modules.user_management.models.user import User

logger = logging.getLogger(__name__)

def get_follow(db: Session, follower_id: str, following_id: str):
    return db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
    ).first()

def is_following(db: Session, follower_id: str, following_id: str) -> bool:
    return get_follow(db, follower_id, following_id) is not None

def follow_user(db: Session, follower_id: str, following_id: str) -> bool:
    """Create the follow edge; returns False when it already existed"""
    if is_following(db, follower_id, following_id):
        return False

    db.add(Follow(follower_id=follower_id, following_id=following_id))
    db.commit()
    logger.info(f"User {follower_id} now follows {following_id}")
    return True

def unfollow_user(db: Session, follower_id: str, following_id: str) -> bool:
    """Remove the follow edge; returns False when there was none"""
    deleted = db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0

def get_following_ids(db: Session, user_id: str) -> List[str]:
    rows = db.query(Follow.following_id).filter(Follow.follower_id == user_id).all()
    return [row[0] for row in rows]

def get_following(db: Session, user_id: str) -> List[User]:
    """Users that user_id follows, most recent first"""
    return (
        db.query(User)
        .join(Follow, Follow.following_id == User.id)
        .filter(Follow.follower_id == user_id)
        .order_by(Follow.created_at.desc())
        .all()
    )

def get_followers(db: Session, user_id: str) -> List[User]:
    """Users following user_id, most recent first"""
    return (
        db.query(User)
        .join(Follow, Follow.follower_id == User.id)
        .filter(Follow.following_id == user_id)
        .order_by(Follow.created_at.desc())
        .all()
    )

def count_followers(db: Session, user_id: str) -> int:
    return db.query(func.count(Follow.follower_id)).filter(Follow.following_id == user_id).scalar() or 0

def count_following(db: Session, user_id: str) -> int:
    return db.query(func.count(Follow.following_id)).filter(Follow.follower_id == user_id).scalar() or 0
