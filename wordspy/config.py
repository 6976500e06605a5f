from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True, slots=True)
class Settings:
    # Prefix for session ids: "<room_domain>-<room_name>".
    room_domain: str
    words_per_team: int
    neutral_words: int
    lock_ttl_ms: int
    log_level: str
    redis_url: str


def settings_from_env() -> Settings:
    return Settings(
        room_domain=os.environ.get("WORDSPY_ROOM_DOMAIN", "wordspy"),
        words_per_team=int(os.environ.get("WORDSPY_WORDS_PER_TEAM", "9")),
        neutral_words=int(os.environ.get("WORDSPY_NEUTRAL_WORDS", "6")),
        lock_ttl_ms=int(os.environ.get("WORDSPY_LOCK_TTL_MS", "5000")),
        log_level=os.environ.get("WORDSPY_LOG_LEVEL", "INFO").upper(),
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings_from_env()
