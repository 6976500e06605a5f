from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest

from wordspy.config import Settings
from wordspy.core.types import Word, WordKind
from wordspy.session_store import SessionRegistry, reset_registry_for_tests

WORDS_PER_TEAM = 3


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs.

    In CI we don't auto-load `.env` so local overrides can't leak into test runs.
    Opt-in with: WORDSPY_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("WORDSPY_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture(autouse=True)
def _fresh_registry() -> Generator[None, None, None]:
    reset_registry_for_tests()
    yield
    reset_registry_for_tests()


def make_board(words_per_team: int = WORDS_PER_TEAM) -> list[Word]:
    """3 team1, 3 team2, 1 assassin, 3 neutral (by default), in that order."""

    words = [Word(word=f"{i}-team1", kind=WordKind.team1) for i in range(words_per_team)]
    words += [Word(word=f"{i}-team2", kind=WordKind.team2) for i in range(words_per_team)]
    words.append(Word(word="assassin", kind=WordKind.assassin))
    words += [Word(word=f"{i}-neutral", kind=WordKind.neutral) for i in range(words_per_team)]
    return words


@pytest.fixture()
def board() -> list[Word]:
    return make_board()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        room_domain="test.example",
        words_per_team=WORDS_PER_TEAM,
        neutral_words=WORDS_PER_TEAM,
        lock_ttl_ms=5_000,
        log_level="DEBUG",
        redis_url="redis://localhost:6379/15",
    )


@pytest.fixture()
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture()
def fake_redis() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def client_and_redis(settings: Settings, registry: SessionRegistry):
    """FastAPI TestClient wired to fakeredis, a fresh registry and test settings."""

    from fastapi.testclient import TestClient

    from wordspy.api.deps import get_app_settings, get_redis, get_session_registry
    from wordspy.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
