"""Pydantic models for the soundwave API."""

from backend.models.events import (
    PlayerUpdatedEvent,
    PlaylistsUpdatedEvent,
    SongResolvedEvent,
    WebSocketMessage,
)
from backend.models.game import Game
from backend.models.player import (
    PlayerState,
    PlayRequest,
    RepeatMode,
    SeekRequest,
    SongRequest,
    VolumeRequest,
)
from backend.models.playlist import (
    Playlist,
    PlaylistAddSongRequest,
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistWithSongs,
)
from backend.models.resolution import Resolution, ResolveResponse
from backend.models.responses import (
    HealthResponse,
    QueueResponse,
    SearchResponse,
)
from backend.models.song import (
    Album,
    AlbumWithSongs,
    Artist,
    Song,
)

__all__ = [
    # Catalog models
    "Song",
    "Album",
    "AlbumWithSongs",
    "Artist",
    # Playlist models
    "Playlist",
    "PlaylistCreate",
    "PlaylistUpdate",
    "PlaylistAddSongRequest",
    "PlaylistWithSongs",
    # Game models
    "Game",
    # Player models
    "RepeatMode",
    "PlayerState",
    "PlayRequest",
    "SongRequest",
    "SeekRequest",
    "VolumeRequest",
    # Resolution models
    "Resolution",
    "ResolveResponse",
    # Response models
    "SearchResponse",
    "QueueResponse",
    "HealthResponse",
    # Event models
    "WebSocketMessage",
    "PlayerUpdatedEvent",
    "PlaylistsUpdatedEvent",
    "SongResolvedEvent",
]
