"""Database service for the soundwave backend.

Simple record storage for the catalog (artists, albums, songs), user
playlists and the games catalog, on SQLite.
"""

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from core.logging import log_database_operation
from pathlib import Path
from typing import Any

DB_TABLES = {
    "artists": """
        CREATE TABLE IF NOT EXISTS artists (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            image_url TEXT,
            genre TEXT,
            verified INTEGER NOT NULL DEFAULT 0,
            streams INTEGER NOT NULL DEFAULT 0
        )
    """,
    "albums": """
        CREATE TABLE IF NOT EXISTS albums (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            artist_id INTEGER NOT NULL,
            cover_url TEXT,
            year INTEGER,
            genre TEXT,
            FOREIGN KEY (artist_id) REFERENCES artists(id) ON DELETE CASCADE
        )
    """,
    "songs": """
        CREATE TABLE IF NOT EXISTS songs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            artist_id INTEGER NOT NULL,
            album_id INTEGER NOT NULL,
            duration INTEGER NOT NULL DEFAULT 0,
            audio_url TEXT,
            video_id TEXT,
            streams INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY (artist_id) REFERENCES artists(id) ON DELETE CASCADE,
            FOREIGN KEY (album_id) REFERENCES albums(id) ON DELETE CASCADE
        )
    """,
    "playlists": """
        CREATE TABLE IF NOT EXISTS playlists (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            owner TEXT NOT NULL,
            name TEXT NOT NULL,
            description TEXT,
            cover_url TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "playlist_songs": """
        CREATE TABLE IF NOT EXISTS playlist_songs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            playlist_id INTEGER NOT NULL,
            song_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            FOREIGN KEY (playlist_id) REFERENCES playlists(id) ON DELETE CASCADE,
            FOREIGN KEY (song_id) REFERENCES songs(id) ON DELETE CASCADE
        )
    """,
    "games": """
        CREATE TABLE IF NOT EXISTS games (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            category TEXT,
            thumbnail_url TEXT
        )
    """,
}

SONG_SELECT = """
    SELECT s.id, s.title, s.artist_id, s.album_id, s.duration, s.audio_url,
           s.video_id, s.streams, ar.name AS artist, al.cover_url AS cover_url
    FROM songs s
    LEFT JOIN artists ar ON s.artist_id = ar.id
    LEFT JOIN albums al ON s.album_id = al.id
"""

PLAYLIST_UPDATABLE_FIELDS = ("name", "description", "cover_url")


class DatabaseService:
    """Database service for FastAPI.

    Opens a connection per operation through a context manager.
    """

    def __init__(self, db_path: str | Path):
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self._ensure_tables()

    def _ensure_tables(self) -> None:
        """Create database tables if they don't exist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            for table_sql in DB_TABLES.values():
                cursor.execute(table_sql)
            conn.commit()

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with automatic cleanup.

        Yields:
            SQLite connection that will be automatically closed
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        # Enable foreign key constraints for CASCADE behavior
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    # ==================== Artist Operations ====================

    def add_artist(self, name: str, image_url: str | None = None, genre: str | None = None, verified: bool = False) -> int:
        """Add an artist to the catalog.

        Returns:
            The ID of the newly added artist
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO artists (name, image_url, genre, verified) VALUES (?, ?, ?, ?)",
                (name, image_url, genre, int(verified)),
            )
            conn.commit()
            log_database_operation("INSERT", table="artists", name=name)
            return cursor.lastrowid or 0

    def get_artists(self) -> list[dict[str, Any]]:
        """Get all artists."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM artists ORDER BY id ASC")
            return [dict(row) for row in cursor.fetchall()]

    def get_artist(self, artist_id: int) -> dict[str, Any] | None:
        """Get a single artist by ID."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM artists WHERE id = ?", (artist_id,))
            row = cursor.fetchone()
            return dict(row) if row else None

    # ==================== Album Operations ====================

    def add_album(self, metadata: dict[str, Any]) -> int:
        """Add an album to the catalog.

        Returns:
            The ID of the newly added album
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO albums (title, artist_id, cover_url, year, genre) VALUES (?, ?, ?, ?, ?)",
                (
                    metadata["title"],
                    metadata["artist_id"],
                    metadata.get("cover_url"),
                    metadata.get("year"),
                    metadata.get("genre"),
                ),
            )
            conn.commit()
            log_database_operation("INSERT", table="albums", title=metadata["title"])
            return cursor.lastrowid or 0

    def get_albums(self) -> list[dict[str, Any]]:
        """Get all albums."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM albums ORDER BY id ASC")
            return [dict(row) for row in cursor.fetchall()]

    def get_album(self, album_id: int) -> dict[str, Any] | None:
        """Get an album with its songs in playback order."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM albums WHERE id = ?", (album_id,))
            row = cursor.fetchone()
            if not row:
                return None

            album = dict(row)
            cursor.execute(f"{SONG_SELECT} WHERE s.album_id = ? ORDER BY s.id ASC", (album_id,))
            album["songs"] = [dict(song) for song in cursor.fetchall()]
            return album

    # ==================== Song Operations ====================

    def add_song(self, metadata: dict[str, Any]) -> int:
        """Add a song to the catalog (ingestion).

        Returns:
            The ID of the newly added song
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO songs (title, artist_id, album_id, duration, audio_url, video_id)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (
                    metadata["title"],
                    metadata["artist_id"],
                    metadata["album_id"],
                    metadata.get("duration", 0),
                    metadata.get("audio_url"),
                    metadata.get("video_id"),
                ),
            )
            conn.commit()
            log_database_operation("INSERT", table="songs", title=metadata["title"])
            return cursor.lastrowid or 0

    def get_songs(self) -> list[dict[str, Any]]:
        """Get all songs."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"{SONG_SELECT} ORDER BY s.id ASC")
            return [dict(row) for row in cursor.fetchall()]

    def get_song(self, song_id: int) -> dict[str, Any] | None:
        """Get a single song by ID."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"{SONG_SELECT} WHERE s.id = ?", (song_id,))
            row = cursor.fetchone()
            return dict(row) if row else None

    def get_songs_by_ids(self, song_ids: list[int]) -> list[dict[str, Any]]:
        """Get songs in the order of ``song_ids``, repeating duplicates.

        Unknown ids are skipped.
        """
        if not song_ids:
            return []

        with self.get_connection() as conn:
            cursor = conn.cursor()
            placeholders = ", ".join("?" for _ in set(song_ids))
            cursor.execute(f"{SONG_SELECT} WHERE s.id IN ({placeholders})", list(set(song_ids)))
            by_id = {row["id"]: dict(row) for row in cursor.fetchall()}
            return [by_id[song_id] for song_id in song_ids if song_id in by_id]

    def increment_song_streams(self, song_id: int) -> dict[str, Any] | None:
        """Record a stream of a song; also counts toward its artist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("UPDATE songs SET streams = streams + 1 WHERE id = ?", (song_id,))
            if cursor.rowcount == 0:
                return None
            cursor.execute(
                "UPDATE artists SET streams = streams + 1 WHERE id = (SELECT artist_id FROM songs WHERE id = ?)",
                (song_id,),
            )
            conn.commit()

        return self.get_song(song_id)

    def set_song_video_id(self, song_id: int, video_id: str) -> dict[str, Any] | None:
        """Attach an external video identifier to a song."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("UPDATE songs SET video_id = ? WHERE id = ?", (video_id, song_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
            log_database_operation("UPDATE", table="songs", song_id=song_id, video_id=video_id)

        return self.get_song(song_id)

    # ==================== Search ====================

    def search(self, query: str, owner: str) -> dict[str, list[dict[str, Any]]]:
        """Case-insensitive substring search across the catalog and the owner's playlists."""
        if not query:
            return {"songs": [], "albums": [], "artists": [], "playlists": []}

        escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        term = f"%{escaped}%"
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute(f"{SONG_SELECT} WHERE LOWER(s.title) LIKE ? ESCAPE '\\' ORDER BY s.id ASC", (term,))
            songs = [dict(row) for row in cursor.fetchall()]

            cursor.execute(
                "SELECT * FROM albums WHERE LOWER(title) LIKE ? ESCAPE '\\'"
                " OR LOWER(COALESCE(genre, '')) LIKE ? ESCAPE '\\' ORDER BY id ASC",
                (term, term),
            )
            albums = [dict(row) for row in cursor.fetchall()]

            cursor.execute(
                "SELECT * FROM artists WHERE LOWER(name) LIKE ? ESCAPE '\\'"
                " OR LOWER(COALESCE(genre, '')) LIKE ? ESCAPE '\\' ORDER BY id ASC",
                (term, term),
            )
            artists = [dict(row) for row in cursor.fetchall()]

            cursor.execute(
                """
                SELECT id FROM playlists
                WHERE owner = ?
                  AND (LOWER(name) LIKE ? ESCAPE '\\' OR LOWER(COALESCE(description, '')) LIKE ? ESCAPE '\\')
                ORDER BY id ASC
            """,
                (owner, term, term),
            )
            playlist_ids = [row["id"] for row in cursor.fetchall()]

        playlists = [self.get_playlist(playlist_id, owner) for playlist_id in playlist_ids]
        return {"songs": songs, "albums": albums, "artists": artists, "playlists": playlists}

    # ==================== Playlist Operations ====================

    def _get_playlist_song_ids(self, cursor: sqlite3.Cursor, playlist_id: int) -> list[int]:
        cursor.execute(
            "SELECT song_id FROM playlist_songs WHERE playlist_id = ? ORDER BY position ASC",
            (playlist_id,),
        )
        return [row["song_id"] for row in cursor.fetchall()]

    def get_playlists(self, owner: str) -> list[dict[str, Any]]:
        """Get all playlists belonging to ``owner``."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM playlists WHERE owner = ? ORDER BY created_at ASC, id ASC", (owner,))
            playlists = [dict(row) for row in cursor.fetchall()]
            for playlist in playlists:
                playlist["song_ids"] = self._get_playlist_song_ids(cursor, playlist["id"])
            return playlists

    def get_playlist(self, playlist_id: int, owner: str) -> dict[str, Any] | None:
        """Get a playlist if it belongs to ``owner``."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM playlists WHERE id = ? AND owner = ?", (playlist_id, owner))
            row = cursor.fetchone()
            if not row:
                return None

            playlist = dict(row)
            playlist["song_ids"] = self._get_playlist_song_ids(cursor, playlist_id)
            return playlist

    def get_playlist_songs(self, playlist_id: int, owner: str) -> list[dict[str, Any]] | None:
        """Get a playlist's songs in playlist order, or None if not accessible."""
        playlist = self.get_playlist(playlist_id, owner)
        if playlist is None:
            return None
        return self.get_songs_by_ids(playlist["song_ids"])

    def create_playlist(
        self, owner: str, name: str, description: str | None = None, song_ids: list[int] | None = None
    ) -> dict[str, Any]:
        """Create a new playlist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO playlists (owner, name, description) VALUES (?, ?, ?)",
                (owner, name, description),
            )
            playlist_id = cursor.lastrowid
            for position, song_id in enumerate(song_ids or []):
                cursor.execute(
                    "INSERT INTO playlist_songs (playlist_id, song_id, position) VALUES (?, ?, ?)",
                    (playlist_id, song_id, position),
                )
            conn.commit()
            log_database_operation("INSERT", table="playlists", playlist_id=playlist_id, owner=owner)

        return self.get_playlist(playlist_id, owner)

    def update_playlist(self, playlist_id: int, owner: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        """Update playlist metadata. Unknown keys are ignored."""
        fields = {key: value for key, value in updates.items() if key in PLAYLIST_UPDATABLE_FIELDS}

        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM playlists WHERE id = ? AND owner = ?", (playlist_id, owner))
            if not cursor.fetchone():
                return None

            if fields:
                assignments = ", ".join(f"{key} = ?" for key in fields)
                cursor.execute(
                    f"UPDATE playlists SET {assignments} WHERE id = ?",
                    [*fields.values(), playlist_id],
                )
                conn.commit()
                log_database_operation("UPDATE", table="playlists", playlist_id=playlist_id, fields=list(fields))

        return self.get_playlist(playlist_id, owner)

    def delete_playlist(self, playlist_id: int, owner: str) -> bool:
        """Delete a playlist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM playlists WHERE id = ? AND owner = ?", (playlist_id, owner))
            conn.commit()
            return cursor.rowcount > 0

    def add_song_to_playlist(self, playlist_id: int, owner: str, song_id: int) -> dict[str, Any] | None:
        """Append a song to the end of a playlist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM playlists WHERE id = ? AND owner = ?", (playlist_id, owner))
            if not cursor.fetchone():
                return None

            cursor.execute("SELECT COALESCE(MAX(position), -1) FROM playlist_songs WHERE playlist_id = ?", (playlist_id,))
            max_position = cursor.fetchone()[0]
            cursor.execute(
                "INSERT INTO playlist_songs (playlist_id, song_id, position) VALUES (?, ?, ?)",
                (playlist_id, song_id, max_position + 1),
            )
            conn.commit()

        return self.get_playlist(playlist_id, owner)

    def remove_song_from_playlist(self, playlist_id: int, owner: str, song_id: int) -> dict[str, Any] | None:
        """Remove every occurrence of a song from a playlist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM playlists WHERE id = ? AND owner = ?", (playlist_id, owner))
            if not cursor.fetchone():
                return None

            cursor.execute("DELETE FROM playlist_songs WHERE playlist_id = ? AND song_id = ?", (playlist_id, song_id))

            # Reindex positions
            cursor.execute(
                "SELECT id FROM playlist_songs WHERE playlist_id = ? ORDER BY position",
                (playlist_id,),
            )
            for new_pos, item in enumerate(cursor.fetchall()):
                cursor.execute("UPDATE playlist_songs SET position = ? WHERE id = ?", (new_pos, item["id"]))

            conn.commit()

        return self.get_playlist(playlist_id, owner)

    # ==================== Game Operations ====================

    def add_game(self, name: str, category: str | None = None, thumbnail_url: str | None = None) -> int:
        """Add a game to the catalog."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO games (name, category, thumbnail_url) VALUES (?, ?, ?)",
                (name, category, thumbnail_url),
            )
            conn.commit()
            return cursor.lastrowid or 0

    def get_games(self) -> list[dict[str, Any]]:
        """Get all games."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM games ORDER BY id ASC")
            return [dict(row) for row in cursor.fetchall()]

    def get_game(self, game_id: int) -> dict[str, Any] | None:
        """Get a single game by ID."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM games WHERE id = ?", (game_id,))
            row = cursor.fetchone()
            return dict(row) if row else None


# Global database instance (will be initialized in main.py)
_db: DatabaseService | None = None


def init_db(db_path: str | Path) -> DatabaseService:
    """Initialize the global database instance."""
    global _db
    _db = DatabaseService(db_path)
    return _db


def get_db() -> DatabaseService:
    """Get the global database instance."""
    if _db is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _db
