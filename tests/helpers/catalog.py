"""Factories for catalog objects used across tests."""

from backend.models.song import Song
from backend.services.database import DatabaseService


def make_song(song_id: int, duration: int = 180, title: str | None = None) -> Song:
    """Build a Song without touching the database."""
    return Song(
        id=song_id,
        title=title or f"Song {song_id}",
        artist=f"Artist {song_id}",
        artist_id=1,
        album_id=1,
        duration=duration,
    )


def seed_catalog(db: DatabaseService) -> dict:
    """Insert one artist, one album with three songs, and two games.

    Returns:
        Dict with artist_id, album_id and song_ids
    """
    artist_id = db.add_artist("The Testers", genre="Indie")
    album_id = db.add_album(
        {"title": "First Light", "artist_id": artist_id, "cover_url": "https://img.example/first.jpg", "genre": "Rock"}
    )
    song_ids = [
        db.add_song({"title": title, "artist_id": artist_id, "album_id": album_id, "duration": duration})
        for title, duration in (("Opening", 200), ("Middle Ground", 185), ("Closing Time", 240))
    ]

    db.add_game("Snake", category="Arcade")
    db.add_game("Sudoku", thumbnail_url="https://img.example/sudoku.png")
    return {"artist_id": artist_id, "album_id": album_id, "song_ids": song_ids}
