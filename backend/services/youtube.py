"""YouTube Data API lookup for attaching playable video ids to songs."""

import requests
from backend.models.resolution import Resolution
from backend.services.database import DatabaseService
from config import YOUTUBE_API_KEY, YOUTUBE_SEARCH_URL, YOUTUBE_TIMEOUT
from core.logging import log_error, log_resolution, youtube_logger
from eliot import start_action
from typing import Any


def build_query(song_title: str, artist_name: str) -> str:
    """Search query used to find a song's audio."""
    return f"{song_title} {artist_name} official audio"


class YouTubeResolver:
    """Best-effort YouTube search client.

    One request per lookup, first result wins. Every failure degrades to
    a non-found Resolution; nothing is raised and nothing is retried.
    """

    def __init__(
        self,
        api_key: str | None = None,
        search_url: str = YOUTUBE_SEARCH_URL,
        timeout: float = YOUTUBE_TIMEOUT,
    ):
        self.api_key = YOUTUBE_API_KEY if api_key is None else api_key
        self.search_url = search_url
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def lookup(self, song_title: str, artist_name: str) -> Resolution:
        """Search for a song and report how the lookup went."""
        if not self.configured:
            log_resolution(
                "not_configured", song_title, artist_name, description="YOUTUBE_API_KEY not configured"
            )
            return Resolution(status="not_configured", reason="YOUTUBE_API_KEY not configured")

        if not song_title or not artist_name:
            log_resolution("not_found", song_title, artist_name, description="Missing title or artist")
            return Resolution(status="not_found", reason="Missing title or artist")

        params = {
            "part": "snippet",
            "q": build_query(song_title, artist_name),
            "type": "video",
            "maxResults": 1,
            "key": self.api_key,
        }

        with start_action(youtube_logger, "youtube_search", title=song_title, artist=artist_name):
            try:
                response = requests.get(self.search_url, params=params, timeout=self.timeout)
                if not response.ok:
                    reason = f"YouTube API error: {response.status_code} {response.reason}"
                    log_resolution("error", song_title, artist_name, reason=reason, description=reason)
                    return Resolution(status="error", reason=reason)

                data: dict[str, Any] = response.json()
                items = data.get("items") or []
                video_id = items[0].get("id", {}).get("videoId") if items else None
            except Exception as e:
                log_error(youtube_logger, e, title=song_title, artist=artist_name)
                return Resolution(status="error", reason=f"{type(e).__name__}: {e}")

        if not video_id:
            log_resolution(
                "not_found",
                song_title,
                artist_name,
                description=f'No YouTube video found for "{song_title}" by {artist_name}',
            )
            return Resolution(status="not_found", reason="No matching video")

        log_resolution(
            "found",
            song_title,
            artist_name,
            video_id=video_id,
            description=f'Found YouTube video for "{song_title}" by {artist_name}: {video_id}',
        )
        return Resolution(status="found", video_id=video_id)

    def resolve(self, song_title: str, artist_name: str) -> str | None:
        """Return the matching video id, or None for any kind of miss."""
        return self.lookup(song_title, artist_name).video_id


def resolve_song(db: DatabaseService, resolver: YouTubeResolver, song_id: int) -> tuple[Resolution, dict[str, Any]] | None:
    """Look up a stored song and attach the video id when one is found.

    Returns:
        (resolution, song) or None if the song does not exist
    """
    song = db.get_song(song_id)
    if song is None:
        return None

    resolution = resolver.lookup(song["title"], song["artist"] or "")
    if resolution.found:
        song = db.set_song_video_id(song_id, resolution.video_id) or song
    return resolution, song


# Global resolver instance (created lazily so config changes are picked up in tests)
_resolver: YouTubeResolver | None = None


def get_resolver() -> YouTubeResolver:
    """Get the global resolver instance."""
    global _resolver
    if _resolver is None:
        _resolver = YouTubeResolver()
    return _resolver


def resolve(song_title: str, artist_name: str) -> str | None:
    """Resolve a song to a YouTube video id using the global resolver."""
    return get_resolver().resolve(song_title, artist_name)
