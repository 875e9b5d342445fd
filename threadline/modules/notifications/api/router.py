from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import MessageResponse
from threadline.modules.user_management.models.user import User
from threadline.modules.notifications.schemas.notification import Notification, UnreadCount
from threadline.modules.notifications.services.notification import (
    get_notification,
    get_user_notifications,
    count_unread,
    mark_as_read,
    mark_all_as_read,
)

router = APIRouter()

@router.get("/", response_model=List[Notification])
@router.get("", response_model=List[Notification])
def read_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Retrieve the current user's most recent notifications"""
    return get_user_notifications(db, current_user.id)

@router.get("/unread-count", response_model=UnreadCount)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    return {"count": count_unread(db, current_user.id)}

@router.put("/read-all", response_model=MessageResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark all notifications as read"""
    count = mark_all_as_read(db, current_user.id)
    return {"message": "All notifications marked as read", "count": count}

@router.put("/{notification_id}/read", response_model=Notification)
def read_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark a notification as read"""
    notification = get_notification(db, notification_id, current_user.id)
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return mark_as_read(db, notification)
