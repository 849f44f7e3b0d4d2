"""Player models for the playback state container and its routes."""

from backend.models.song import Song
from enum import Enum
from pydantic import BaseModel, Field, model_validator


class RepeatMode(str, Enum):
    """Repeat mode, cycled off -> all -> single -> off."""

    OFF = "off"
    ALL = "all"
    SINGLE = "single"

    def cycle(self) -> "RepeatMode":
        order = [RepeatMode.OFF, RepeatMode.ALL, RepeatMode.SINGLE]
        return order[(order.index(self) + 1) % len(order)]


class PlayerState(BaseModel):
    """Serializable snapshot of the playback state."""

    current_track: Song | None = None
    current_index: int | None = None
    is_playing: bool = False
    current_time: float = 0
    duration: float = 0
    volume: float = Field(ge=0, le=1)
    shuffle: bool = False
    repeat: RepeatMode = RepeatMode.OFF
    queue: list[Song] = []


class PlayRequest(BaseModel):
    """Request to play a song within an album or playlist context."""

    song_id: int
    album_id: int | None = None
    playlist_id: int | None = None

    @model_validator(mode="after")
    def check_single_context(self):
        if (self.album_id is None) == (self.playlist_id is None):
            raise ValueError("Exactly one of album_id or playlist_id is required")
        return self


class SongRequest(BaseModel):
    """Request carrying a single song id."""

    song_id: int


class SeekRequest(BaseModel):
    """Request to seek within the current track (clamped, not validated)."""

    seconds: float


class VolumeRequest(BaseModel):
    """Request to change volume (clamped to 0-1, not validated)."""

    level: float
