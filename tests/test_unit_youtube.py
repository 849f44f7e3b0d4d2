"""Unit tests for YouTube track resolution."""

import pytest
import requests
from backend.models.resolution import Resolution
from backend.services.youtube import YouTubeResolver, build_query, resolve, resolve_song
from unittest.mock import MagicMock, patch


def search_response(items, ok=True, status_code=200, reason="OK"):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = {"items": items}
    return response


@pytest.fixture
def resolver():
    """Resolver with a fake API key."""
    return YouTubeResolver(api_key="test-key", search_url="https://yt.example/search", timeout=5)


def test_build_query():
    """Test the search query combines title, artist and a qualifier."""
    assert build_query("Blinding Lights", "The Weeknd") == "Blinding Lights The Weeknd official audio"


@patch("backend.services.youtube.requests.get")
def test_resolve_returns_first_video_id(mock_get, resolver):
    """Test the first search result's video id is returned."""
    mock_get.return_value = search_response([{"id": {"videoId": "abc123"}}, {"id": {"videoId": "zzz"}}])

    assert resolver.resolve("Song", "Artist") == "abc123"

    args, kwargs = mock_get.call_args
    assert args[0] == "https://yt.example/search"
    assert kwargs["timeout"] == 5
    assert kwargs["params"] == {
        "part": "snippet",
        "q": "Song Artist official audio",
        "type": "video",
        "maxResults": 1,
        "key": "test-key",
    }


@patch("backend.services.youtube.requests.get")
def test_lookup_found(mock_get, resolver):
    """Test a match is reported as found."""
    mock_get.return_value = search_response([{"id": {"videoId": "abc123"}}])

    resolution = resolver.lookup("Song", "Artist")

    assert resolution.status == "found"
    assert resolution.found is True
    assert resolution.video_id == "abc123"
    assert resolution.reason is None


@patch("backend.services.youtube.requests.get")
def test_zero_results_is_not_found(mock_get, resolver):
    """Test an empty result list resolves to None."""
    mock_get.return_value = search_response([])

    resolution = resolver.lookup("Song", "Artist")

    assert resolution.status == "not_found"
    assert resolution.video_id is None
    assert resolver.resolve("Song", "Artist") is None


@patch("backend.services.youtube.requests.get")
def test_result_without_video_id_is_not_found(mock_get, resolver):
    """Test a result that is not a video resolves to None."""
    mock_get.return_value = search_response([{"id": {"kind": "youtube#channel"}}])

    assert resolver.lookup("Song", "Artist").status == "not_found"


@patch("backend.services.youtube.requests.get")
def test_http_error_status(mock_get, resolver):
    """Test a non-success HTTP status is reported as an error."""
    mock_get.return_value = search_response([], ok=False, status_code=403, reason="Forbidden")

    resolution = resolver.lookup("Song", "Artist")

    assert resolution.status == "error"
    assert resolution.video_id is None
    assert "403" in resolution.reason


@patch("backend.services.youtube.requests.get")
def test_network_failure_returns_none(mock_get, resolver):
    """Test a transport failure degrades to None without raising."""
    mock_get.side_effect = requests.ConnectionError("connection refused")

    resolution = resolver.lookup("Song", "Artist")

    assert resolution.status == "error"
    assert "ConnectionError" in resolution.reason
    assert resolver.resolve("Song", "Artist") is None


@patch("backend.services.youtube.requests.get")
def test_malformed_json_returns_none(mock_get, resolver):
    """Test an undecodable body degrades to None."""
    response = search_response([])
    response.json.side_effect = ValueError("not json")
    mock_get.return_value = response

    assert resolver.lookup("Song", "Artist").status == "error"


@patch("backend.services.youtube.requests.get")
def test_not_configured_skips_request(mock_get):
    """Test a missing API key never hits the network."""
    resolver = YouTubeResolver(api_key="")

    resolution = resolver.lookup("Song", "Artist")

    assert resolver.configured is False
    assert resolution.status == "not_configured"
    assert resolver.resolve("Song", "Artist") is None
    mock_get.assert_not_called()


@pytest.mark.parametrize("title,artist", [("", "Artist"), ("Song", "")])
@patch("backend.services.youtube.requests.get")
def test_missing_title_or_artist(mock_get, resolver, title, artist):
    """Test empty title or artist is a miss without a request."""
    assert resolver.lookup(title, artist).status == "not_found"
    mock_get.assert_not_called()


class TestResolveSong:
    """Test resolving stored songs."""

    def test_found_attaches_video_id(self, catalog_db):
        """Test a found video id is saved on the song."""
        resolver = MagicMock()
        resolver.lookup.return_value = Resolution(status="found", video_id="vid42")
        song_id = catalog_db.get_songs()[0]["id"]

        resolution, song = resolve_song(catalog_db, resolver, song_id)

        assert resolution.found is True
        assert song["video_id"] == "vid42"
        assert catalog_db.get_song(song_id)["video_id"] == "vid42"
        resolver.lookup.assert_called_once_with("Opening", "The Testers")

    def test_miss_leaves_song_unchanged(self, catalog_db):
        """Test a miss keeps the song without a video id."""

        resolver = MagicMock()
        resolver.lookup.return_value = Resolution(status="not_found", reason="No matching video")
        song_id = catalog_db.get_songs()[0]["id"]

        resolution, song = resolve_song(catalog_db, resolver, song_id)

        assert resolution.found is False
        assert song["video_id"] is None

    def test_unknown_song(self, catalog_db):
        """Test an unknown song id returns None."""
        assert resolve_song(catalog_db, MagicMock(), 9999) is None


@patch("backend.services.youtube.requests.get")
def test_module_resolve_uses_global_resolver(mock_get):
    """Test the module-level helper delegates to the shared resolver."""
    mock_get.return_value = search_response([{"id": {"videoId": "abc123"}}])

    with patch("backend.services.youtube._resolver", YouTubeResolver(api_key="test-key")):
        assert resolve("Song", "Artist") == "abc123"
