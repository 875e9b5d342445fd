"""
Real-time channel.

Clients exchange JSON frames ``{"event": ..., "data": ..., "ack": n}`` over
``/ws``. A frame carrying ``ack`` gets a matching ``{"event": "ack", "ack": n}``
reply. Database work runs in the threadpool with its own session, the same way
sync route handlers do.
"""
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from threadline.core.security import verify_access_token
from threadline.db.session import SessionLocal
from threadline.modules.user_management.services.user import get_user
from threadline.modules.messaging.realtime.manager import manager, conversation_room, user_room
from threadline.modules.messaging.schemas.conversation import (
    Conversation as ConversationSchema,
    Message as MessageSchema,
    StartConversationPayload,
    SendMessagePayload,
)
from threadline.modules.messaging.services.conversation import (
    get_conversation,
    get_or_create_conversation,
    create_message,
)

router = APIRouter()
logger = logging.getLogger(__name__)

def _authenticate(token: Optional[str]) -> Optional[str]:
    if not token:
        return None
    user_id = verify_access_token(token)
    if user_id is None:
        return None
    db = SessionLocal()
    try:
        user = get_user(db, user_id=user_id)
        return user.id if user and user.is_active else None
    finally:
        db.close()

def _ensure_participant(conversation_id: str, user_id: str) -> None:
    db = SessionLocal()
    try:
        conversation = get_conversation(db, conversation_id)
        if not conversation:
            raise ValueError("Conversation not found")
        if not conversation.has_participant(user_id):
            raise ValueError("Not authorized to join this conversation")
    finally:
        db.close()

def _start_conversation(payload: StartConversationPayload) -> ConversationSchema:
    db = SessionLocal()
    try:
        for user_id in (payload.user1_id, payload.user2_id):
            if not get_user(db, user_id=user_id):
                raise ValueError(f"User {user_id} not found")
        if payload.user1_id == payload.user2_id:
            raise ValueError("A conversation needs two different users")
        conversation = get_or_create_conversation(db, payload.user1_id, payload.user2_id)
        return ConversationSchema.model_validate(get_conversation(db, conversation.id))
    finally:
        db.close()

def _send_message(payload: SendMessagePayload) -> MessageSchema:
    db = SessionLocal()
    try:
        conversation = get_conversation(db, payload.conversation_id)
        if not conversation:
            raise ValueError("Conversation not found")
        message = create_message(db, conversation, payload.sender_id, payload.content)
        return MessageSchema.model_validate(message)
    finally:
        db.close()

async def _handle(websocket: WebSocket, user_id: Optional[str], event: str, data: Any, ack: Optional[int]) -> None:
    if event == "join_conversation":
        conversation_id = data.get("conversation_id") if isinstance(data, dict) else data
        if not isinstance(conversation_id, str) or not conversation_id:
            raise ValueError("conversation_id is required")
        if user_id is not None:
            await run_in_threadpool(_ensure_participant, conversation_id, user_id)
        manager.join(websocket, conversation_room(conversation_id))
        logger.debug(f"Socket joined conversation {conversation_id}")
        if ack is not None:
            await manager.emit(websocket, "ack", {"joined": conversation_id}, ack=ack)

    elif event == "start_conversation":
        payload = StartConversationPayload.model_validate(data)
        if user_id is not None and user_id not in (payload.user1_id, payload.user2_id):
            raise ValueError("Cannot start conversations on behalf of other users")
        conversation = await run_in_threadpool(_start_conversation, payload)
        if ack is not None:
            await manager.emit(websocket, "ack", conversation, ack=ack)

    elif event == "send_message":
        payload = SendMessagePayload.model_validate(data)
        if user_id is not None and payload.sender_id != user_id:
            raise ValueError("Cannot send messages on behalf of another user")
        message = await run_in_threadpool(_send_message, payload)
        await manager.broadcast(conversation_room(message.conversation_id), "receive_message", message)
        if ack is not None:
            await manager.emit(websocket, "ack", message, ack=ack)

    else:
        raise ValueError(f"Unknown event '{event}'")

@router.websocket("/ws")
async def socket_endpoint(websocket: WebSocket, token: Optional[str] = None):
    await manager.connect(websocket)

    user_id = await run_in_threadpool(_authenticate, token)
    if user_id:
        manager.join(websocket, user_room(user_id))
        logger.info(f"Socket authenticated as user {user_id}")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            try:
                raw = message.get("text")
                if raw is None:
                    raw = (message.get("bytes") or b"").decode("utf-8")
                frame = json.loads(raw)
            except ValueError:
                await manager.emit(websocket, "error", {"message": "Malformed frame"})
                continue
            if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
                await manager.emit(websocket, "error", {"message": "Frame must carry an event name"})
                continue

            ack = frame.get("ack")
            if not isinstance(ack, int):
                ack = None

            try:
                await _handle(websocket, user_id, frame["event"], frame.get("data"), ack)
            except ValidationError as e:
                await manager.emit(websocket, "error", {"message": f"Invalid {frame['event']} payload"})
                logger.debug(f"Rejected {frame['event']} payload: {e}")
            except ValueError as e:
                await manager.emit(websocket, "error", {"message": str(e)})
    except WebSocketDisconnect:
        logger.debug("Socket closed by client")
    finally:
        manager.disconnect(websocket)
