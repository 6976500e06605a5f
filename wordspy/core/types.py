from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Team(StrEnum):
    team1 = "team1"
    team2 = "team2"

    @property
    def other(self) -> "Team":
        return Team.team2 if self is Team.team1 else Team.team1


class WordKind(StrEnum):
    team1 = "team1"
    team2 = "team2"
    neutral = "neutral"
    assassin = "assassin"


class GameStatus(StrEnum):
    unknown = "unknown"
    pending = "pending"
    playing = "playing"
    ended = "ended"


class Word(BaseModel):
    word: str
    kind: WordKind

    # Flips to True once and stays there.
    is_revealed: bool = False

    def matches_team(self, team: Team) -> bool:
        return self.kind.value == team.value


class Player(BaseModel):
    id: str
    team: Team
    is_spymaster: bool = False


class TeamResult(BaseModel):
    team: Team
    words_left: int
    is_assassinated: bool = False


class TurnResult(BaseModel):
    """Outcome of a successful word selection, as broadcast in `turn-result`."""

    team: Team
    last_revealed_word: Word


class GameData(BaseModel):
    """Full state dump broadcast as `game-data-dump`."""

    game_id: str
    name: str
    status: GameStatus
    players: list[Player]
    current_turn: Team | None = None
    revealed_word_vals: list[str]
    scores: dict[Team, TeamResult]
