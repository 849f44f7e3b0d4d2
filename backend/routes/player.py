"""Player routes for the soundwave API.

These drive the playback session; every mutating route returns the new
player state and broadcasts it as a player:updated event.
"""

from backend.models.player import PlayerState, PlayRequest, SeekRequest, SongRequest, VolumeRequest
from backend.models.responses import QueueResponse
from backend.models.song import Song
from backend.routes.playlists import get_current_user
from backend.routes.websocket import emit_player_updated
from backend.services.database import DatabaseService, get_db
from backend.services.player import get_player, to_songs
from core.playback import PlaybackState
from fastapi import APIRouter, Depends, HTTPException

router = APIRouter(prefix="/player", tags=["player"])


def _get_song_or_404(db: DatabaseService, song_id: int) -> Song:
    song = db.get_song(song_id)
    if not song:
        raise HTTPException(status_code=404, detail=f"Song with id {song_id} not found")
    return Song.model_validate(song)


async def _publish(action: str, player: PlaybackState) -> PlayerState:
    state = player.snapshot()
    await emit_player_updated(action, state)
    return state


@router.get("", response_model=PlayerState)
async def get_state(player: PlaybackState = Depends(get_player)):
    """Get the current playback state."""
    return player.snapshot()


@router.post("/play", response_model=PlayerState)
async def play(
    request: PlayRequest,
    owner: str = Depends(get_current_user),
    db: DatabaseService = Depends(get_db),
    player: PlaybackState = Depends(get_player),
):
    """Play a song with the queue rebuilt from an album or playlist."""
    track = _get_song_or_404(db, request.song_id)

    if request.album_id is not None:
        album = db.get_album(request.album_id)
        if not album:
            raise HTTPException(status_code=404, detail=f"Album with id {request.album_id} not found")
        context = to_songs(album["songs"])
    else:
        rows = db.get_playlist_songs(request.playlist_id, owner)
        if rows is None:
            raise HTTPException(
                status_code=404, detail=f"Playlist with id {request.playlist_id} not found or access denied"
            )
        context = to_songs(rows)

    try:
        player.play(track, context)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return await _publish("play", player)


@router.post("/play-track", response_model=PlayerState)
async def play_track(
    request: SongRequest,
    db: DatabaseService = Depends(get_db),
    player: PlaybackState = Depends(get_player),
):
    """Play a single song, queueing it if needed."""
    player.play_track(_get_song_or_404(db, request.song_id))
    return await _publish("play_track", player)


@router.post("/toggle", response_model=PlayerState)
async def toggle_play_pause(player: PlaybackState = Depends(get_player)):
    """Toggle play/pause."""
    player.toggle_play_pause()
    return await _publish("toggle", player)


@router.post("/next", response_model=PlayerState)
async def next_track(player: PlaybackState = Depends(get_player)):
    """Skip to the next track."""
    player.next_track()
    return await _publish("next", player)


@router.post("/previous", response_model=PlayerState)
async def previous_track(player: PlaybackState = Depends(get_player)):
    """Restart the current track or go back one."""
    player.previous_track()
    return await _publish("previous", player)


@router.post("/ended", response_model=PlayerState)
async def track_ended(player: PlaybackState = Depends(get_player)):
    """Report that the current track finished playing."""
    player.on_track_end()
    return await _publish("ended", player)


@router.post("/seek", response_model=PlayerState)
async def seek(request: SeekRequest, player: PlaybackState = Depends(get_player)):
    """Seek within the current track."""
    player.seek_to(request.seconds)
    return await _publish("seek", player)


@router.post("/volume", response_model=PlayerState)
async def set_volume(request: VolumeRequest, player: PlaybackState = Depends(get_player)):
    """Set the volume."""
    player.set_volume(request.level)
    return await _publish("volume", player)


@router.post("/shuffle", response_model=PlayerState)
async def toggle_shuffle(player: PlaybackState = Depends(get_player)):
    """Toggle shuffle."""
    player.toggle_shuffle()
    return await _publish("shuffle", player)


@router.post("/repeat", response_model=PlayerState)
async def toggle_repeat(player: PlaybackState = Depends(get_player)):
    """Cycle the repeat mode."""
    player.toggle_repeat()
    return await _publish("repeat", player)


@router.get("/queue", response_model=QueueResponse)
async def get_queue(player: PlaybackState = Depends(get_player)):
    """Get the play queue."""
    return {
        "items": player.queue,
        "count": len(player.queue),
        "current_index": player.current_index,
    }


@router.post("/queue", status_code=201, response_model=PlayerState)
async def add_to_queue(
    request: SongRequest,
    db: DatabaseService = Depends(get_db),
    player: PlaybackState = Depends(get_player),
):
    """Append a song to the queue."""
    player.add_to_queue(_get_song_or_404(db, request.song_id))
    return await _publish("queue_add", player)


@router.post("/queue/clear", response_model=PlayerState)
async def clear_queue(player: PlaybackState = Depends(get_player)):
    """Clear the queue; the current track keeps playing."""
    player.clear_queue()
    return await _publish("queue_clear", player)


@router.delete("/queue/{song_id}", response_model=PlayerState)
async def remove_from_queue(song_id: int, player: PlaybackState = Depends(get_player)):
    """Remove a song from the queue."""
    if not player.remove_from_queue(song_id):
        raise HTTPException(status_code=404, detail=f"Song with id {song_id} is not queued")
    return await _publish("queue_remove", player)
