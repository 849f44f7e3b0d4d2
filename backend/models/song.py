"""Catalog models for songs, albums and artists."""

from pydantic import BaseModel, Field


class ArtistBase(BaseModel):
    """Base artist model."""

    name: str = Field(min_length=1)
    image_url: str | None = None
    genre: str | None = None


class Artist(ArtistBase):
    """Full artist model with database fields."""

    id: int
    verified: bool = False
    streams: int = 0

    class Config:
        from_attributes = True


class AlbumBase(BaseModel):
    """Base album model."""

    title: str = Field(min_length=1)
    artist_id: int
    cover_url: str | None = None
    year: int | None = None
    genre: str | None = None


class Album(AlbumBase):
    """Full album model with database fields."""

    id: int

    class Config:
        from_attributes = True


class SongBase(BaseModel):
    """Base song model with common fields."""

    title: str = Field(min_length=1)
    artist_id: int
    album_id: int
    duration: int = Field(ge=0, description="Length in seconds")
    audio_url: str | None = None


class Song(SongBase):
    """Full song model as served to clients.

    ``artist`` and ``cover_url`` are joined in from the artist and album rows.
    """

    id: int
    artist: str | None = None
    cover_url: str | None = None
    video_id: str | None = None
    streams: int = 0

    class Config:
        from_attributes = True


class AlbumWithSongs(Album):
    """Album with its songs in playback order."""

    songs: list[Song] = []
