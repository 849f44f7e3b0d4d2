"""Playback session service for the soundwave backend."""

from backend.models.song import Song
from core.playback import PlaybackState
from typing import Any


def to_songs(rows: list[dict[str, Any]]) -> list[Song]:
    """Convert database rows to Song models."""
    return [Song.model_validate(row) for row in rows]


# Global playback session (one per application instance, created in main.py)
_player: PlaybackState | None = None


def init_player(**kwargs) -> PlaybackState:
    """Create a fresh playback session, replacing any existing one."""
    global _player
    _player = PlaybackState(**kwargs)
    return _player


def get_player() -> PlaybackState:
    """Get the global playback session."""
    if _player is None:
        raise RuntimeError("Player not initialized. Call init_player() first.")
    return _player
