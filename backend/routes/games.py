"""Games routes for the soundwave API."""

from backend.models.game import Game
from backend.services.database import DatabaseService, get_db
from fastapi import APIRouter, Depends, HTTPException

router = APIRouter(prefix="/games", tags=["games"])


@router.get("", response_model=list[Game])
async def get_games(db: DatabaseService = Depends(get_db)):
    """Get all games."""
    return db.get_games()


@router.get("/{game_id}", response_model=Game)
async def get_game(game_id: int, db: DatabaseService = Depends(get_db)):
    """Get a single game by ID."""
    game = db.get_game(game_id)
    if not game:
        raise HTTPException(status_code=404, detail=f"Game with id {game_id} not found")
    return game
