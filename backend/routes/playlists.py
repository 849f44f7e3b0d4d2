"""Playlist routes for the soundwave API."""

from backend.models.playlist import (
    Playlist,
    PlaylistAddSongRequest,
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistWithSongs,
)
from backend.routes.websocket import emit_playlists_updated
from backend.services.database import DatabaseService, get_db
from config import DEFAULT_USER
from core.logging import log_api_request
from fastapi import APIRouter, Depends, Header, HTTPException

router = APIRouter(prefix="/playlists", tags=["playlists"])


def get_current_user(x_user_id: str | None = Header(None)) -> str:
    """Owner of the request. Authentication is handled upstream."""
    return x_user_id or DEFAULT_USER


def _not_found(playlist_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Playlist with id {playlist_id} not found or access denied")


@router.get("", response_model=list[Playlist])
async def get_playlists(owner: str = Depends(get_current_user), db: DatabaseService = Depends(get_db)):
    """Get the caller's playlists."""
    return db.get_playlists(owner)


@router.get("/{playlist_id}", response_model=PlaylistWithSongs)
async def get_playlist(playlist_id: int, owner: str = Depends(get_current_user), db: DatabaseService = Depends(get_db)):
    """Get a playlist with its songs."""
    playlist = db.get_playlist(playlist_id, owner)
    if not playlist:
        raise _not_found(playlist_id)
    playlist["songs"] = db.get_songs_by_ids(playlist["song_ids"])
    return playlist


@router.post("", status_code=201, response_model=Playlist)
async def create_playlist(
    request: PlaylistCreate,
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
):
    """Create a new playlist."""
    known = {song["id"] for song in db.get_songs_by_ids(request.song_ids)}
    missing = [song_id for song_id in request.song_ids if song_id not in known]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown song ids: {missing}")

    playlist = db.create_playlist(owner, request.name, request.description, request.song_ids)
    log_api_request("create_playlist", description=f"{owner} created '{request.name}'", playlist_id=playlist["id"])
    await emit_playlists_updated("created", playlist["id"], playlist["song_ids"])
    return playlist


@router.patch("/{playlist_id}", response_model=Playlist)
async def update_playlist(
    playlist_id: int,
    request: PlaylistUpdate,
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
):
    """Update playlist metadata."""
    playlist = db.update_playlist(playlist_id, owner, request.model_dump(exclude_unset=True))
    if not playlist:
        raise _not_found(playlist_id)
    await emit_playlists_updated("updated", playlist_id)
    return playlist


@router.delete("/{playlist_id}", status_code=204)
async def delete_playlist(playlist_id: int, owner: str = Depends(get_current_user), db: DatabaseService = Depends(get_db)):
    """Delete a playlist."""
    if not db.delete_playlist(playlist_id, owner):
        raise _not_found(playlist_id)
    await emit_playlists_updated("deleted", playlist_id)


@router.post("/{playlist_id}/songs", response_model=Playlist)
async def add_song_to_playlist(
    playlist_id: int,
    request: PlaylistAddSongRequest,
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
):
    """Append a song to a playlist."""
    if not db.get_song(request.song_id):
        raise HTTPException(status_code=404, detail=f"Song with id {request.song_id} not found")

    playlist = db.add_song_to_playlist(playlist_id, owner, request.song_id)
    if not playlist:
        raise _not_found(playlist_id)
    await emit_playlists_updated("song_added", playlist_id, [request.song_id])
    return playlist


@router.delete("/{playlist_id}/songs/{song_id}", response_model=Playlist)
async def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
):
    """Remove a song (every occurrence) from a playlist."""
    playlist = db.remove_song_from_playlist(playlist_id, owner, song_id)
    if not playlist:
        raise _not_found(playlist_id)
    await emit_playlists_updated("song_removed", playlist_id, [song_id])
    return playlist
