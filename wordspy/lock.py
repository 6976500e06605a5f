from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4

import redis

logger = logging.getLogger(__name__)


def lock_key(game_id: str) -> str:
    return f"lock:game:{game_id}"


@contextmanager
def game_lock(*, r: redis.Redis, game_id: str, ttl_ms: int = 5_000) -> Iterator[str]:
    """Hold the game's lock for one operation; yields the holder token.

    A concurrent action for the same game fails fast with
    `ValueError("Game is busy")`. On exit the key is only deleted if it still
    carries our token: once the TTL lapses another holder may own it.
    """

    key = lock_key(game_id)
    token = uuid4().hex
    if not r.set(key, token, nx=True, px=ttl_ms):
        raise ValueError("Game is busy")
    try:
        yield token
    finally:
        if r.get(key) == token:
            r.delete(key)
        else:
            logger.warning("lock for game %s expired before release (ttl_ms=%d)", game_id, ttl_ms)
