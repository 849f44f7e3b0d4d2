"""Track resolution result models."""

from backend.models.song import Song
from pydantic import BaseModel
from typing import Literal

ResolutionStatus = Literal["found", "not_found", "not_configured", "error"]


class Resolution(BaseModel):
    """Outcome of a video lookup for a song.

    ``video_id`` is set only when ``status`` is ``found``; ``reason``
    describes every other outcome.
    """

    status: ResolutionStatus
    video_id: str | None = None
    reason: str | None = None

    @property
    def found(self) -> bool:
        return self.status == "found"


class ResolveResponse(BaseModel):
    """Response for resolving a stored song."""

    resolution: Resolution
    song: Song
