from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.services.user import get_user
from threadline.modules.home_feed.schemas.feed import FeedItem
from threadline.modules.home_feed.services.feed import build_feed, get_following_feed, get_user_feed

router = APIRouter()

@router.get("/", response_model=List[FeedItem])
@router.get("", response_model=List[FeedItem])
def read_feed(db: Session = Depends(get_db)) -> Any:
    """Every post and repost, merged chronologically"""
    return build_feed(db)

@router.get("/following", response_model=List[FeedItem])
def read_following_feed(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Posts and reposts from the accounts the current user follows"""
    return get_following_feed(db, current_user.id)

@router.get("/users/{user_id}", response_model=List[FeedItem])
def read_user_feed(user_id: str, db: Session = Depends(get_db)) -> Any:
    if not get_user(db, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return get_user_feed(db, user_id)
