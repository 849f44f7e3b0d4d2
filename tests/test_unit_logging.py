"""Unit tests for the human-readable log destination."""

import io
import pytest
from core.logging import HumanReadableDestination


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def destination(output):
    return HumanReadableDestination(output)


def test_player_action_with_state_change(destination, output):
    """Player actions show the track and the state transition."""
    destination(
        {
            "message_type": "player_action",
            "action": "play_pause",
            "track": "The Testers - Opening",
            "old_state": "playing",
            "new_state": "paused",
        }
    )

    assert output.getvalue() == "[PLAYER] play_pause: The Testers - Opening (playing → paused)\n"


def test_track_resolution(destination, output):
    """Resolution outcomes are tagged with the service."""
    destination({"message_type": "track_resolution", "status": "not_found", "description": "No video"})

    assert output.getvalue() == "[YOUTUBE] No video\n"


def test_api_request(destination, output):
    destination({"message_type": "api_request", "action": "create_playlist", "description": "alice created 'Mix'"})

    assert output.getvalue() == "[API] create_playlist: alice created 'Mix'\n"


def test_error(destination, output):
    destination({"message_type": "error_occurred", "error_type": "ConnectionError", "error_message": "refused"})

    assert output.getvalue() == "[ERROR] ConnectionError: refused\n"


@pytest.mark.parametrize(
    "message",
    [
        {"action_type": "next_track", "action_status": "started"},
        {"message_type": "queue_operation", "operation": "append"},
        {"message_type": "database_operation", "operation": "INSERT"},
        {"message_type": "unknown"},
    ],
)
def test_skipped_messages(destination, output, message):
    """Action boundaries, noisy types and empty messages are not printed."""
    destination(message)

    assert output.getvalue() == ""
