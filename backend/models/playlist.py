"""Playlist models for user playlist management."""

from backend.models.song import Song
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field, field_validator


class PlaylistBase(BaseModel):
    """Base playlist model."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = None


class Playlist(PlaylistBase):
    """Full playlist model with database fields."""

    id: int
    owner: str
    cover_url: str | None = None
    song_ids: list[int] = []
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PlaylistCreate(PlaylistBase):
    """Model for creating a new playlist."""

    song_ids: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("song_ids", "songIds"),
        description="Initial songs, in order",
    )


class PlaylistUpdate(BaseModel):
    """Model for updating playlist metadata."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    cover_url: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Playlist name cannot be null")
        return value


class PlaylistAddSongRequest(BaseModel):
    """Request to append a song to a playlist."""

    song_id: int


class PlaylistWithSongs(Playlist):
    """Playlist with its songs resolved, in playlist order."""

    songs: list[Song] = []
