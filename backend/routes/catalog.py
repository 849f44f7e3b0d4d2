"""Catalog routes (artists, albums, songs, search) for the soundwave API."""

from backend.models.resolution import ResolveResponse
from backend.models.responses import SearchResponse
from backend.models.song import AlbumWithSongs, Album, Artist, Song
from backend.routes.playlists import get_current_user
from backend.routes.websocket import emit_song_resolved
from backend.services.database import DatabaseService, get_db
from backend.services.youtube import YouTubeResolver, get_resolver, resolve_song
from core.logging import log_api_request
from fastapi import APIRouter, Depends, HTTPException

router = APIRouter(tags=["catalog"])


@router.get("/artists", response_model=list[Artist])
async def get_artists(db: DatabaseService = Depends(get_db)):
    """Get all artists."""
    return db.get_artists()


@router.get("/artists/{artist_id}", response_model=Artist)
async def get_artist(artist_id: int, db: DatabaseService = Depends(get_db)):
    """Get a single artist by ID."""
    artist = db.get_artist(artist_id)
    if not artist:
        raise HTTPException(status_code=404, detail=f"Artist with id {artist_id} not found")
    return artist


@router.get("/albums", response_model=list[Album])
async def get_albums(db: DatabaseService = Depends(get_db)):
    """Get all albums."""
    return db.get_albums()


@router.get("/albums/{album_id}", response_model=AlbumWithSongs)
async def get_album(album_id: int, db: DatabaseService = Depends(get_db)):
    """Get an album with its songs."""
    album = db.get_album(album_id)
    if not album:
        raise HTTPException(status_code=404, detail=f"Album with id {album_id} not found")
    return album


@router.get("/songs", response_model=list[Song])
async def get_songs(db: DatabaseService = Depends(get_db)):
    """Get all songs."""
    return db.get_songs()


@router.get("/songs/{song_id}", response_model=Song)
async def get_song(song_id: int, db: DatabaseService = Depends(get_db)):
    """Get a single song by ID."""
    song = db.get_song(song_id)
    if not song:
        raise HTTPException(status_code=404, detail=f"Song with id {song_id} not found")
    return song


@router.post("/songs/{song_id}/play", response_model=Song)
async def track_stream(song_id: int, db: DatabaseService = Depends(get_db)):
    """Record a stream of a song."""
    song = db.increment_song_streams(song_id)
    if not song:
        raise HTTPException(status_code=404, detail=f"Song with id {song_id} not found")
    return song


@router.post("/songs/{song_id}/resolve", response_model=ResolveResponse)
async def resolve_song_video(
    song_id: int,
    db: DatabaseService = Depends(get_db),
    resolver: YouTubeResolver = Depends(get_resolver),
):
    """Attach a playable YouTube video id to a song.

    A miss leaves the song unchanged; the resolution status says why.
    """
    result = resolve_song(db, resolver, song_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Song with id {song_id} not found")

    resolution, song = result
    log_api_request("resolve_song", song_id=song_id, status=resolution.status)
    if resolution.found:
        await emit_song_resolved(song_id, resolution.video_id)
    return {"resolution": resolution, "song": song}


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = "",
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
):
    """Search songs, albums, artists and the caller's playlists."""
    return db.search(q.strip(), owner)
