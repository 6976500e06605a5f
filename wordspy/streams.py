from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, cast

import redis


@dataclass(frozen=True, slots=True)
class Mailbox:
    game_id: str
    player_id: str

    @property
    def key(self) -> str:
        return f"mailbox:{self.game_id}:{self.player_id}"


def _stringify(fields: Mapping[str, object]) -> dict[str, str]:
    return {str(k): str(v) for k, v in fields.items()}


def publish_to_mailbox(*, r: redis.Redis, mailbox: Mailbox, fields: Mapping[str, object]) -> str:
    """Append an entry to a player's mailbox stream."""

    return cast(str, r.xadd(mailbox.key, _stringify(fields)))


def publish_many(*, r: redis.Redis, entries: Sequence[tuple[str, Mapping[str, object]]]) -> list[str]:
    return [cast(str, r.xadd(key, _stringify(fields))) for key, fields in entries]


def read_mailbox(*, r: redis.Redis, mailbox: Mailbox, count: int = 20, start: str = "-", end: str = "+") -> list[dict[str, object]]:
    entries = r.xrange(mailbox.key, min=start, max=end, count=count)
    return [{"id": mid, "fields": fields} for mid, fields in entries]
