"""WebSocket endpoints for real-time communication."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from backend.app.websocket.manager import manager

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/{owner_id}")
async def websocket_endpoint(websocket: WebSocket, owner_id: str):
    """
    WebSocket endpoint for an owner's live query feed.

    Events sent to clients:
    - query_analyzed: A new query was analyzed and stored
    """
    await manager.connect(websocket, owner_id)

    try:
        while True:
            # Client messages are only used as keep-alive
            data = await websocket.receive_text()

            if data == "ping":
                await manager.send_personal_message(
                    {"type": "pong"},
                    websocket
                )

    except WebSocketDisconnect:
        manager.disconnect(websocket, owner_id)
