"""
In-process socket registry.

Sockets are grouped into named rooms: ``conversation:<id>`` for chat threads
and ``user:<id>`` for a signed-in user's notification pushes. Membership only
lives in this process; a dropped connection leaves its rooms and nothing is
replayed when it comes back.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

def conversation_room(conversation_id: str) -> str:
    return f"conversation:{conversation_id}"

def user_room(user_id: str) -> str:
    return f"user:{user_id}"

class ConnectionManager:
    def __init__(self):
        self.rooms: Dict[str, Set[WebSocket]] = defaultdict(set)
        self.memberships: Dict[WebSocket, Set[str]] = {}
        # Loop each socket was accepted on; pushes from worker threads are scheduled there
        self.loops: Dict[WebSocket, asyncio.AbstractEventLoop] = {}

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.memberships[websocket] = set()
        self.loops[websocket] = asyncio.get_running_loop()
        logger.debug(f"Socket connected ({len(self.memberships)} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        for room in self.memberships.pop(websocket, set()):
            members = self.rooms.get(room)
            if members is None:
                continue
            members.discard(websocket)
            if not members:
                del self.rooms[room]
        self.loops.pop(websocket, None)
        logger.debug(f"Socket disconnected ({len(self.memberships)} open)")

    def join(self, websocket: WebSocket, room: str) -> None:
        self.rooms[room].add(websocket)
        self.memberships.setdefault(websocket, set()).add(room)

    def members(self, room: str) -> Set[WebSocket]:
        return set(self.rooms.get(room, ()))

    async def emit(self, websocket: WebSocket, event: str, data: Any = None, ack: Optional[int] = None) -> None:
        frame = {"event": event, "data": jsonable_encoder(data)}
        if ack is not None:
            frame["ack"] = ack
        await websocket.send_json(frame)

    async def broadcast(self, room: str, event: str, data: Any = None) -> None:
        for websocket in self.members(room):
            try:
                await self.emit(websocket, event, data)
            except Exception as e:
                # The socket went away between the lookup and the send
                logger.warning(f"Dropping socket from {room} after failed send: {e}")
                self.disconnect(websocket)

    def publish(self, room: str, event: str, data: Any = None) -> None:
        """Fire-and-forget emit usable from sync code running in worker threads"""
        payload = jsonable_encoder(data)
        for websocket in self.members(room):
            loop = self.loops.get(websocket)
            if loop is None or loop.is_closed():
                continue
            asyncio.run_coroutine_threadsafe(self._safe_emit(websocket, room, event, payload), loop)

    async def _safe_emit(self, websocket: WebSocket, room: str, event: str, data: Any) -> None:
        try:
            await self.emit(websocket, event, data)
        except Exception as e:
            logger.warning(f"Failed to push {event} to {room}: {e}")
            self.disconnect(websocket)

manager = ConnectionManager()
