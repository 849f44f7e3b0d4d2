"""Game catalog models."""

from pydantic import BaseModel, Field


class Game(BaseModel):
    """A game in the catalog. Plain record, no state."""

    id: int
    name: str = Field(min_length=1)
    category: str | None = None
    thumbnail_url: str | None = None

    class Config:
        from_attributes = True
