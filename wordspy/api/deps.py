from __future__ import annotations

from collections.abc import Generator

import redis

from wordspy.config import Settings, get_settings
from wordspy.session_store import SessionRegistry, get_registry


def get_redis() -> Generator[redis.Redis, None, None]:
    # decode_responses=True => strings in/out instead of bytes
    client = redis.Redis.from_url(get_settings().redis_url, decode_responses=True)
    try:
        yield client
    finally:
        client.close()


def get_app_settings() -> Settings:
    return get_settings()


def get_session_registry() -> SessionRegistry:
    return get_registry()
