"""FastAPI backend for soundwave.

This is the main entry point for the Python backend.
It provides REST API endpoints for the catalog, playlists, games
and the playback session, plus a WebSocket event channel.
"""

import config
import time
from backend.models.responses import HealthResponse
from backend.routes.catalog import router as catalog_router
from backend.routes.games import router as games_router
from backend.routes.player import router as player_router
from backend.routes.playlists import router as playlists_router
from backend.routes.websocket import router as websocket_router
from backend.services.database import DatabaseService, get_db, init_db
from backend.services.player import init_player
from backend.services.youtube import YouTubeResolver, get_resolver
from contextlib import asynccontextmanager
from core.logging import app_logger, log_error, setup_logging
from eliot import log_message
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Version
__version__ = "1.0.0"

# Track startup time for health check
_start_time: float = 0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global _start_time
    _start_time = time.time()

    setup_logging(config.LOG_LEVEL, config.LOG_FILE)

    init_db(config.DB_PATH)
    init_player()

    if not get_resolver().configured:
        log_message(
            message_type="youtube_not_configured",
            message="YOUTUBE_API_KEY not configured; track resolution disabled",
        )

    log_message(message_type="application_ready", message=f"soundwave backend v{__version__} started (database: {config.DB_PATH})")

    yield

    log_message(message_type="application_shutdown", message="soundwave backend shutting down")


# Create FastAPI app
app = FastAPI(
    title="soundwave API",
    description="REST API for the soundwave music streaming app",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(catalog_router, prefix="/api")
app.include_router(playlists_router, prefix="/api")
app.include_router(games_router, prefix="/api")
app.include_router(player_router, prefix="/api")
app.include_router(websocket_router)


@app.get("/api/health", response_model=HealthResponse)
async def health_check(resolver: YouTubeResolver = Depends(get_resolver)):
    """Health check endpoint."""
    try:
        db: DatabaseService = get_db()
        with db.get_connection() as conn:
            conn.cursor().execute("SELECT 1")
        db_status = "connected"
    except Exception as e:
        log_error(app_logger, e, check="database")
        db_status = "error"

    uptime = int(time.time() - _start_time) if _start_time else 0

    return {
        "status": "healthy",
        "version": __version__,
        "database": db_status,
        "uptime_seconds": uptime,
        "video_resolution": resolver.configured,
    }


def run():
    """Entry point for running the server."""
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.RELOAD,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
