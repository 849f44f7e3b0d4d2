"""
Logging configuration for soundwave using eliot.

This module provides structured logging throughout the application using eliot,
which provides context-aware logging with support for nested actions
and structured data.
"""

import eliot
import logging
import sys
from eliot import log_message, start_action, write_traceback
from eliot.stdlib import EliotHandler
from pathlib import Path

_configured = False


class HumanReadableDestination:
    """Destination that formats logs in a human-readable format."""

    # Noisy message types that duplicate other output
    skip_messages = {
        "queue_operation",
        "database_operation",
    }

    def __init__(self, file):
        self.file = file

    def __call__(self, message):
        """Format and write log message."""
        # Skip internal eliot action start/finish messages
        if message.get("action_type") and not message.get("message_type"):
            return

        msg_type = message.get("message_type", "")
        if msg_type in self.skip_messages:
            return

        action = message.get("action", msg_type)
        description = message.get("description", "")
        trigger = message.get("trigger_source", "")

        if "player_action" in msg_type:
            track = message.get("track", "")
            old_state = message.get("old_state", "")
            new_state = message.get("new_state", "")
            prefix = f"[{trigger.upper()}] " if trigger else "[PLAYER] "

            if track and old_state and new_state:
                output = f"{prefix}{action}: {track} ({old_state} → {new_state})"
            elif track:
                output = f"{prefix}{action}: {track}"
            elif description:
                output = f"{prefix}{description}"
            else:
                output = f"{prefix}{action}"

        elif msg_type == "track_resolution":
            output = f"[YOUTUBE] {description or message.get('status', '')}"

        elif "api_request" in msg_type:
            output = f"[API] {action}"
            if description:
                output += f": {description}"

        elif msg_type == "error_occurred":
            output = f"[ERROR] {message.get('error_type', '')}: {message.get('error_message', '')}"

        elif description:
            output = description
        elif "message" in message:
            output = message["message"]
        else:
            return

        if output and output.strip():
            self.file.write(output + "\n")
            self.file.flush()


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """
    Set up eliot logging for the application.

    Safe to call more than once; destinations are only added the first time.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write raw JSON logs to (always logs to stdout as well)
    """
    global _configured
    if _configured:
        return
    _configured = True

    eliot.add_destinations(HumanReadableDestination(sys.stdout))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        eliot.to_file(open(log_path, "a"))

    # Route stdlib logging (uvicorn, fastapi) through eliot
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.addHandler(EliotHandler())

    log_message(
        message_type="logging_setup", log_level=log_level, log_file=log_file or "stdout", message="Eliot logging configured"
    )


def get_logger(name: str) -> eliot.Logger:
    """
    Get an eliot logger instance for a specific component.

    The returned Logger is meant for start_action()/write_traceback();
    use the log_* helpers below to emit messages.
    """
    return eliot.Logger()


# Global logger instances for different components
app_logger = get_logger("soundwave_app")
player_logger = get_logger("soundwave_player")
youtube_logger = get_logger("soundwave_youtube")


def log_player_action(action: str, **context):
    """
    Log player actions with context.

    Args:
        action: Player action (play, pause, next, previous, etc.)
        **context: Additional context data
    """
    log_message(message_type="player_action", action=action, **context)


def log_queue_operation(operation: str, **context):
    """Log queue operations with context."""
    log_message(message_type="queue_operation", operation=operation, **context)


def log_database_operation(operation: str, table: str | None = None, **context):
    """Log database operations with context."""
    log_message(message_type="database_operation", operation=operation, table=table, **context)


def log_resolution(status: str, title: str, artist: str, **context):
    """
    Log a track resolution outcome.

    Args:
        status: found, not_found, not_configured or error
        title: Song title that was searched for
        artist: Artist name that was searched for
        **context: Additional context data (video_id, reason, ...)
    """
    log_message(message_type="track_resolution", status=status, title=title, artist=artist, **context)


def log_api_request(action: str, trigger_source: str = "api", **context):
    """
    Log API requests with context.

    Args:
        action: API action being performed
        trigger_source: Source of the request (default: "api")
        **context: Additional context data (request parameters, response, etc.)
    """
    log_message(message_type="api_request", action=action, trigger_source=trigger_source, **context)


def log_error(logger: eliot.Logger, error: Exception, **context):
    """
    Log errors with full context and traceback.

    Must be called from inside an except block.
    """
    write_traceback(logger, exc_info=sys.exc_info())
    log_message(message_type="error_occurred", error_message=str(error), error_type=type(error).__name__, **context)


__all__ = [
    "setup_logging",
    "get_logger",
    "start_action",
    "app_logger",
    "player_logger",
    "youtube_logger",
    "log_player_action",
    "log_queue_operation",
    "log_database_operation",
    "log_resolution",
    "log_api_request",
    "log_error",
]
