from typing import Any, List
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import MessageResponse
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.schemas.user import User as UserSchema
from threadline.modules.user_management.services.user import get_user
from threadline.modules.follows.services.follow import follow_user, unfollow_user, get_following
from threadline.modules.notifications.services.notification_events import create_follow_notification

router = APIRouter()
logger = logging.getLogger(__name__)

def _check_user_exists(db: Session, user_id: str) -> User:
    """Validate user exists, raise HTTP 404 if not"""
    user = get_user(db, user_id=user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user

@router.post("/follow/{user_id}", response_model=MessageResponse, response_model_exclude_none=True)
def follow(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Follow a user; following someone twice changes nothing"""
    _check_user_exists(db, user_id)

    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot follow yourself"
        )

    if follow_user(db, current_user.id, user_id):
        create_follow_notification(db, current_user.id, user_id)

    return {"message": "Followed successfully"}

@router.post("/unfollow/{user_id}", response_model=MessageResponse, response_model_exclude_none=True)
def unfollow(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Stop following a user"""
    _check_user_exists(db, user_id)
    unfollow_user(db, current_user.id, user_id)
    return {"message": "Unfollowed successfully"}

@router.get("/following", response_model=List[UserSchema])
def read_following(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Users the current user follows"""
    return get_following(db, current_user.id)
