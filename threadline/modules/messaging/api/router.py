from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import MessageResponse
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.services.user import get_user
from threadline.modules.messaging.models.conversation import Conversation
from threadline.modules.messaging.schemas.conversation import (
    Conversation as ConversationSchema,
    ConversationCreate,
    ConversationSummary,
    Message,
)
from threadline.modules.messaging.services.conversation import (
    get_conversation,
    get_or_create_conversation,
    get_user_conversations,
    get_messages,
    mark_conversation_read,
)

router = APIRouter()

def _validate_conversation(db: Session, conversation_id: str, user_id: str) -> Conversation:
    """Return the conversation if user_id takes part in it, raise HTTPException otherwise"""
    conversation = get_conversation(db, conversation_id)
    if not conversation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Conversation not found"
        )
    if not conversation.has_participant(user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to view this conversation"
        )
    return conversation

@router.get("", response_model=List[ConversationSummary])
def read_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Conversations of the current user, most recently active first"""
    return get_user_conversations(db, current_user.id)

@router.post("", response_model=ConversationSchema)
def start_conversation(
    *,
    db: Session = Depends(get_db),
    conversation_in: ConversationCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Return the conversation with another user, creating it on first contact"""
    if conversation_in.user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot start a conversation with yourself"
        )
    if not get_user(db, user_id=conversation_in.user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    conversation = get_or_create_conversation(db, current_user.id, conversation_in.user_id)
    return get_conversation(db, conversation.id)

@router.get("/{conversation_id}/messages", response_model=List[Message])
def read_messages(
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    _validate_conversation(db, conversation_id, current_user.id)
    return get_messages(db, conversation_id)

@router.put("/{conversation_id}/read", response_model=MessageResponse)
def read_conversation(
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark the other participant's messages as read"""
    conversation = _validate_conversation(db, conversation_id, current_user.id)
    count = mark_conversation_read(db, conversation, current_user.id)
    return {"message": "Conversation marked as read", "count": count}
