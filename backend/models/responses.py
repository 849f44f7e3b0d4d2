"""Response models for API endpoints."""

from backend.models.playlist import Playlist
from backend.models.song import Album, Artist, Song
from pydantic import BaseModel


class SearchResponse(BaseModel):
    """Response for catalog search."""

    songs: list[Song] = []
    albums: list[Album] = []
    artists: list[Artist] = []
    playlists: list[Playlist] = []


class QueueResponse(BaseModel):
    """Response for queue listing."""

    items: list[Song]
    count: int
    current_index: int | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str
    uptime_seconds: int
    video_resolution: bool
