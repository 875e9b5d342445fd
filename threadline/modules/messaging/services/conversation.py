from typing import List, Optional
import uuid
import logging
from datetime import datetime
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from threadline.modules.messaging.models.conversation import Conversation, Message
from threadline.modules.messaging.schemas.conversation import (
    ConversationSummary,
    Conversation as ConversationSchema,
    Message as MessageSchema,
)
from threadline.modules.notifications.services.notification import mark_messages_from_as_read
from threadline.modules.notifications.services.notification_events import create_message_notification

logger = logging.getLogger(__name__)

def get_conversation(db: Session, conversation_id: str) -> Optional[Conversation]:
    """Get conversation by ID with both participants loaded"""
    return (
        db.query(Conversation)
        .options(joinedload(Conversation.user1), joinedload(Conversation.user2))
        .filter(Conversation.id == conversation_id)
        .first()
    )

def find_conversation(db: Session, user1_id: str, user2_id: str) -> Optional[Conversation]:
    """Conversation between two users, whichever of them started it"""
    return db.query(Conversation).filter(
        or_(
            and_(Conversation.user1_id == user1_id, Conversation.user2_id == user2_id),
            and_(Conversation.user1_id == user2_id, Conversation.user2_id == user1_id),
        )
    ).first()

def get_or_create_conversation(db: Session, user1_id: str, user2_id: str) -> Conversation:
    conversation = find_conversation(db, user1_id, user2_id)
    if conversation:
        return conversation

    conversation = Conversation(
        id=str(uuid.uuid4()),
        user1_id=user1_id,
        user2_id=user2_id,
    )
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    logger.info(f"Started conversation {conversation.id} between {user1_id} and {user2_id}")
    return conversation

def get_user_conversations(db: Session, user_id: str) -> List[ConversationSummary]:
    """Conversations of a user, most recently active first, with last message and unread count"""
    conversations = (
        db.query(Conversation)
        .options(joinedload(Conversation.user1), joinedload(Conversation.user2))
        .filter(or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id))
        .order_by(Conversation.updated_at.desc())
        .all()
    )

    result = []
    for conversation in conversations:
        last_message = (
            db.query(Message)
            .filter(Message.conversation_id == conversation.id)
            .order_by(Message.created_at.desc())
            .first()
        )
        unread_count = db.query(Message).filter(
            Message.conversation_id == conversation.id,
            Message.sender_id != user_id,
            Message.read == False,  # noqa: E712
        ).count()

        result.append(ConversationSummary(
            **ConversationSchema.model_validate(conversation).model_dump(),
            last_message=MessageSchema.model_validate(last_message) if last_message else None,
            unread_count=unread_count,
        ))

    return result

def get_messages(db: Session, conversation_id: str) -> List[Message]:
    """Messages of a conversation, oldest first"""
    return (
        db.query(Message)
        .filter(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc())
        .all()
    )

def create_message(db: Session, conversation: Conversation, sender_id: str, content: str) -> Message:
    """Store a message, bump the conversation and notify the other participant"""
    if not conversation.has_participant(sender_id):
        raise ValueError("Sender is not part of this conversation")

    message = Message(
        id=str(uuid.uuid4()),
        conversation_id=conversation.id,
        sender_id=sender_id,
        content=content,
    )
    db.add(message)
    conversation.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(message)

    create_message_notification(db, conversation, message)
    return message

def mark_conversation_read(db: Session, conversation: Conversation, user_id: str) -> int:
    """Mark the other participant's messages, and their message notifications, as read for user_id"""
    count = db.query(Message).filter(
        Message.conversation_id == conversation.id,
        Message.sender_id != user_id,
        Message.read == False,  # noqa: E712
    ).update({"read": True}, synchronize_session=False)
    db.commit()

    mark_messages_from_as_read(db, user_id, conversation.other_participant(user_id))
    return count
