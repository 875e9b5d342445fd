from typing import List, Optional
import uuid
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from threadline.core.config import settings
from threadline.modules.notifications.models.notification import Notification, MESSAGE
from threadline.modules.notifications.schemas.notification import (
    NotificationCreate,
    Notification as NotificationSchema,
)
from threadline.modules.messaging.realtime.manager import manager, user_room

logger = logging.getLogger(__name__)

def get_notification(db: Session, notification_id: str, recipient_id: str) -> Optional[Notification]:
    """Get a notification addressed to recipient_id"""
    return db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.recipient_id == recipient_id,
    ).first()

def get_user_notifications(db: Session, user_id: str, limit: Optional[int] = None) -> List[Notification]:
    """Most recent notifications for a user, with sender and post loaded"""
    return (
        db.query(Notification)
        .options(joinedload(Notification.sender), joinedload(Notification.post))
        .filter(Notification.recipient_id == user_id)
        .order_by(Notification.created_at.desc())
        .limit(limit or settings.NOTIFICATIONS_LIMIT)
        .all()
    )

def count_unread(db: Session, user_id: str) -> int:
    return db.query(Notification).filter(
        Notification.recipient_id == user_id,
        Notification.read == False,  # noqa: E712
    ).count()

def create_notification(db: Session, notification_in: NotificationCreate) -> Optional[Notification]:
    """
    Store a notification and push it to the recipient's open sockets.

    Failures are logged and swallowed: the action that triggered the
    notification has already been committed and stays committed.
    """
    notification = Notification(
        id=str(uuid.uuid4()),
        **notification_in.model_dump(),
    )
    try:
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating {notification_in.type} notification: {e}")
        return None

    manager.publish(
        user_room(notification.recipient_id),
        "new_notification",
        NotificationSchema.model_validate(notification),
    )
    return notification

def mark_as_read(db: Session, notification: Notification) -> Notification:
    """Mark a single notification as read"""
    notification.read = True
    db.commit()
    db.refresh(notification)
    return notification

def mark_all_as_read(db: Session, user_id: str) -> int:
    """Mark all notifications as read for a user"""
    count = db.query(Notification).filter(
        Notification.recipient_id == user_id,
        Notification.read == False,  # noqa: E712
    ).update({"read": True}, synchronize_session=False)
    db.commit()
    return count

def mark_messages_from_as_read(db: Session, user_id: str, sender_id: str) -> int:
    """Mark the message notifications user_id received from sender_id as read"""
    count = db.query(Notification).filter(
        Notification.recipient_id == user_id,
        Notification.sender_id == sender_id,
        Notification.type == MESSAGE,
        Notification.read == False,  # noqa: E712
    ).update({"read": True}, synchronize_session=False)
    db.commit()
    return count

def delete_post_notifications(db: Session, post_id: str) -> int:
    """Remove notifications pointing at a post that is about to be deleted"""
    return db.query(Notification).filter(
        Notification.post_id == post_id
    ).delete(synchronize_session=False)
