"""Backend services for the soundwave API."""

from backend.services.database import DatabaseService, get_db, init_db
from backend.services.player import get_player, init_player
from backend.services.youtube import YouTubeResolver, get_resolver, resolve, resolve_song

__all__ = [
    "DatabaseService",
    "get_db",
    "init_db",
    "get_player",
    "init_player",
    "YouTubeResolver",
    "get_resolver",
    "resolve",
    "resolve_song",
]
