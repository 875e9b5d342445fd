from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from threadline.core.security import get_password_hash
from threadline.modules.user_management.models.user import User

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()

def search_users(db: Session, query: str, exclude_id: Optional[str] = None, limit: int = 20) -> List[User]:
    """Find users whose username or bio contains the query"""
    # LIKE wildcards in the query are matched literally
    term = query.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{term}%"
    users = db.query(User).filter(
        or_(User.username.ilike(pattern, escape="\\"), User.bio.ilike(pattern, escape="\\"))
    )
    if exclude_id:
        users = users.filter(User.id != exclude_id)
    return users.order_by(User.username).limit(limit).all()

def update_profile(
    db: Session,
    user: User,
    username: Optional[str] = None,
    bio: Optional[str] = None,
    new_password: Optional[str] = None,
    profile_picture: Optional[str] = None,
) -> User:
    """Apply profile changes; callers validate uniqueness and the current password first"""
    if username:
        user.username = username
    if bio is not None:
        user.bio = bio
    if new_password:
        user.hashed_password = get_password_hash(new_password)
    if profile_picture is not None:
        user.profile_picture = profile_picture

    db.commit()
    db.refresh(user)
    return user
