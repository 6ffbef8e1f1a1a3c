"""WebSocket connection manager for per-owner realtime updates."""

import json
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections grouped into one room per owner."""

    def __init__(self):
        """Initialize connection manager."""
        # Maps owner_id -> list of WebSocket connections
        self.active_connections: dict[str, list[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, owner_id: str) -> None:
        """Accept a new WebSocket connection and add it to the owner's room."""
        await websocket.accept()
        self.active_connections.setdefault(owner_id, []).append(websocket)

    def disconnect(self, websocket: WebSocket, owner_id: str) -> None:
        """Remove a WebSocket connection from the owner's room."""
        if owner_id in self.active_connections:
            if websocket in self.active_connections[owner_id]:
                self.active_connections[owner_id].remove(websocket)

            # Clean up empty rooms
            if not self.active_connections[owner_id]:
                del self.active_connections[owner_id]

    async def send_personal_message(self, message: dict[str, Any], websocket: WebSocket) -> None:
        """Send a message to a specific WebSocket connection."""
        await websocket.send_text(json.dumps(message))

    async def broadcast_to_owner(self, owner_id: str, message: dict[str, Any]) -> None:
        """Broadcast a message to all connections of an owner."""
        if owner_id not in self.active_connections:
            return

        disconnected = []
        for connection in list(self.active_connections[owner_id]):
            try:
                await connection.send_text(json.dumps(message))
            except Exception as e:
                logger.warning(f"[WS] Dropping broken connection for owner {owner_id}: {e}")
                disconnected.append(connection)

        for connection in disconnected:
            self.disconnect(connection, owner_id)

    async def send_query_analyzed(self, owner_id: str, activity: dict[str, Any]) -> None:
        """Broadcast a newly analyzed query to the owner's live feed."""
        message = {
            "type": "query_analyzed",
            "data": activity,
        }
        await self.broadcast_to_owner(owner_id, message)


# Global connection manager instance
manager = ConnectionManager()
