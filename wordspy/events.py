"""Outbound event names and payload shapes.

Names match what clients subscribe to over the WebSocket and read from
their mailbox streams.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel

from wordspy.core.types import Team, TeamResult

EventName = Literal[
    "joined-team",
    "game-data-dump",
    "new-spymaster",
    "next-turn",
    "turn-result",
    "game-over",
    "srv-error",
]


class JoinedTeamData(BaseModel):
    session_id: str
    team_id: Team
    current_turn: Team | None = None


class SpymasterData(BaseModel):
    spymaster_id: str
    team_id: Team


class TurnData(BaseModel):
    current_turn: Team | None = None


class GameOverData(BaseModel):
    winner: Team
    reason: Literal["all_words_found", "assassinated"]
    scores: dict[Team, TeamResult]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventName
    game_id: str
    data: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventName, game_id: str, data: BaseModel | dict[str, Any]) -> "GameEvent":
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        return GameEvent(type=type, game_id=game_id, data=data, ts=datetime.now(UTC))

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "game_id": self.game_id, "data": self.data, "ts": self.ts.isoformat()}

    def to_stream_fields(self) -> dict[str, str]:
        # Streams only carry flat string fields; the payload travels as JSON.
        return {
            "type": self.type,
            "game_id": self.game_id,
            "data": json.dumps(self.data, sort_keys=True),
            "ts": self.ts.isoformat(),
        }
