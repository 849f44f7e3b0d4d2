"""WebSocket event models for real-time updates."""

from backend.models.player import PlayerState
from datetime import datetime
from pydantic import BaseModel
from typing import Any, Literal


class WebSocketMessage(BaseModel):
    """Base WebSocket message format."""

    event: str
    data: dict[str, Any]
    timestamp: datetime


class PlayerUpdatedEvent(BaseModel):
    """Event when the playback state changes."""

    action: str
    state: PlayerState


class PlaylistsUpdatedEvent(BaseModel):
    """Event when playlists change."""

    action: Literal["created", "updated", "deleted", "song_added", "song_removed"]
    playlist_id: int
    song_ids: list[int] | None = None


class SongResolvedEvent(BaseModel):
    """Event when a song gets a playable video id attached."""

    song_id: int
    video_id: str
