from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from wordspy.core.types import GameData, Word


class GameCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    room_url: str = Field(..., min_length=1)
    room_name: str = Field(..., min_length=1, max_length=200)

    # Optional custom word pool; the bundled list is used otherwise.
    words: list[str] | None = None
    # Pre-built board (kinds already assigned). Takes precedence over `words`.
    board: list[Word] | None = None
    seed: int | None = None


class GameListResponse(BaseModel):
    games: list[GameData]


class ActionResponse(BaseModel):
    game: GameData
    events: list[dict[str, Any]]


class ErrorDetail(BaseModel):
    code: str
    message: str
