"""Core gameplay primitives (the Game aggregate, its types and errors).

Kept free of FastAPI and Redis concerns so it can be reused by API routes, CLI, and tests.
"""

from wordspy.core.errors import (
    DuplicatePlayer,
    GameError,
    InconsistentStateError,
    InvalidTurn,
    InvalidWord,
    PlayerNotFound,
    SpymasterExists,
    WordAlreadyRevealed,
)
from wordspy.core.game import Game
from wordspy.core.types import GameData, GameStatus, Player, Team, TeamResult, TurnResult, Word, WordKind

__all__ = [
    "DuplicatePlayer",
    "Game",
    "GameData",
    "GameError",
    "GameStatus",
    "InconsistentStateError",
    "InvalidTurn",
    "InvalidWord",
    "Player",
    "PlayerNotFound",
    "SpymasterExists",
    "Team",
    "TeamResult",
    "TurnResult",
    "Word",
    "WordAlreadyRevealed",
    "WordKind",
]
