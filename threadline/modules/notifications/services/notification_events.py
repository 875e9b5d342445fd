"""
Notification events service.
This module handles the creation of notifications for the social actions in the application.
"""
from typing import Optional
from sqlalchemy.orm import Session
import logging

from threadline.modules.notifications.models.notification import (
    Notification, LIKE, REPOST, FOLLOW, COMMENT, MESSAGE,
)
from threadline.modules.notifications.schemas.notification import NotificationCreate
from threadline.modules.notifications.services.notification import create_notification
from threadline.modules.posts.models.post import Post
from threadline.modules.messaging.models.conversation import Conversation, Message

logger = logging.getLogger(__name__)

def _notify_post_author(db: Session, post: Post, actor_id: str, type: str, content: Optional[str] = None) -> Optional[Notification]:
    # Acting on your own post never notifies
    if post.author_id == actor_id:
        logger.debug(f"User {actor_id} acted ({type}) on their own post, no notification created")
        return None

    notification = create_notification(db, NotificationCreate(
        recipient_id=post.author_id,
        sender_id=actor_id,
        type=type,
        post_id=post.id,
        content=content,
    ))
    if notification:
        logger.info(f"Created {type} notification for user {post.author_id} from user {actor_id}")
    return notification

def create_like_notification(db: Session, post: Post, liker_id: str) -> Optional[Notification]:
    """Notify the post author that liker_id liked the post"""
    return _notify_post_author(db, post, liker_id, LIKE)

def create_repost_notification(db: Session, post: Post, reposter_id: str) -> Optional[Notification]:
    """Notify the post author that reposter_id reposted the post"""
    return _notify_post_author(db, post, reposter_id, REPOST)

def create_comment_notification(db: Session, post: Post, commenter_id: str, comment_content: str) -> Optional[Notification]:
    """Notify the post author about a new comment, carrying the comment text as context"""
    return _notify_post_author(db, post, commenter_id, COMMENT, content=comment_content)

def create_follow_notification(db: Session, follower_id: str, followed_id: str) -> Optional[Notification]:
    return create_notification(db, NotificationCreate(
        recipient_id=followed_id,
        sender_id=follower_id,
        type=FOLLOW,
    ))

def create_message_notification(db: Session, conversation: Conversation, message: Message) -> Optional[Notification]:
    """Notify the other participant of a conversation about a new message"""
    return create_notification(db, NotificationCreate(
        recipient_id=conversation.other_participant(message.sender_id),
        sender_id=message.sender_id,
        type=MESSAGE,
        content=message.content,
    ))
