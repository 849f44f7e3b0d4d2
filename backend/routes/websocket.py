"""WebSocket endpoint for real-time events."""

import asyncio
import json
from backend.models.events import (
    PlayerUpdatedEvent,
    PlaylistsUpdatedEvent,
    SongResolvedEvent,
    WebSocketMessage,
)
from backend.models.player import PlayerState
from datetime import datetime, timezone
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from typing import Any

router = APIRouter(tags=["websocket"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ConnectionManager:
    """Manages WebSocket connections for broadcasting events."""

    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """Accept a new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, event: str, data: dict[str, Any]):
        """Broadcast an event to all connected clients."""
        message = WebSocketMessage(event=event, data=data, timestamp=datetime.now(timezone.utc))
        message_json = message.model_dump_json()

        # Send to all connections, removing any that fail
        disconnected = []
        for connection in self.active_connections:
            try:
                await connection.send_text(message_json)
            except Exception:
                disconnected.append(connection)

        for conn in disconnected:
            self.disconnect(conn)


# Global connection manager
manager = ConnectionManager()


def get_connection_manager() -> ConnectionManager:
    """Get the global connection manager."""
    return manager


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for real-time events."""
    await manager.connect(websocket)
    try:
        while True:
            try:
                data = await asyncio.wait_for(websocket.receive_text(), timeout=30.0)
                if data == "ping":
                    await websocket.send_text("pong")
            except TimeoutError:
                await websocket.send_text(json.dumps({"event": "heartbeat", "timestamp": _timestamp()}))
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception:
        manager.disconnect(websocket)


# Helper functions for broadcasting events from routes
async def emit_player_updated(action: str, state: PlayerState):
    """Emit player:updated event."""
    event = PlayerUpdatedEvent(action=action, state=state)
    await manager.broadcast("player:updated", event.model_dump(mode="json"))


async def emit_playlists_updated(action: str, playlist_id: int, song_ids: list[int] | None = None):
    """Emit playlists:updated event."""
    event = PlaylistsUpdatedEvent(action=action, playlist_id=playlist_id, song_ids=song_ids)
    await manager.broadcast("playlists:updated", event.model_dump(mode="json"))


async def emit_song_resolved(song_id: int, video_id: str):
    """Emit songs:resolved event."""
    event = SongResolvedEvent(song_id=song_id, video_id=video_id)
    await manager.broadcast("songs:resolved", event.model_dump(mode="json"))
