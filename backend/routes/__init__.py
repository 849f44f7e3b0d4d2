"""API routes for the soundwave backend."""

from backend.routes.catalog import router as catalog_router
from backend.routes.games import router as games_router
from backend.routes.player import router as player_router
from backend.routes.playlists import router as playlists_router
from backend.routes.websocket import router as websocket_router

__all__ = [
    "catalog_router",
    "games_router",
    "player_router",
    "playlists_router",
    "websocket_router",
]
