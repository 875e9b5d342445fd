import uuid
import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from threadline.core.security import get_password_hash, verify_password
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.schemas.user import UserCreate
from threadline.modules.user_management.services.user import get_user_by_email

logger = logging.getLogger("threadline")

def user_exists(db: Session, email: str, username: str) -> bool:
    """Check whether the email or the username is already registered"""
    return db.query(User).filter(
        or_(User.email == email, User.username == username)
    ).first() is not None

def register_user(db: Session, user_in: UserCreate) -> User:
    """Create a user with a bcrypt-hashed password"""
    user = User(
        id=str(uuid.uuid4()),
        username=user_in.username,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
        bio=user_in.bio or "",
        profile_picture=user_in.profile_picture or "",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.username} ({user.id})")
    return user

def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials, None otherwise"""
    user = get_user_by_email(db, email=email)
    if not user:
        logger.info(f"Login attempt for unknown email {email}")
        return None
    if not verify_password(password, user.hashed_password):
        logger.info(f"Password mismatch for {email}")
        return None
    return user
