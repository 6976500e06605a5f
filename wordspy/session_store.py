from __future__ import annotations

import logging
import random
from collections import Counter

from wordspy.board import deal_board, load_word_list
from wordspy.config import Settings
from wordspy.core.game import Game, session_id_for
from wordspy.core.types import Word, WordKind

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory Game instances keyed by game id.

    Games live for the lifetime of the process; nothing is persisted.
    """

    def __init__(self) -> None:
        self._games: dict[str, Game] = {}

    def add(self, game: Game) -> Game:
        if game.id in self._games:
            raise ValueError(f"Game already exists: {game.id}")
        self._games[game.id] = game
        return game

    def get(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def require(self, game_id: str) -> Game:
        game = self.get(game_id)
        if game is None:
            raise ValueError("Game not found")
        return game

    def list(self) -> list[Game]:
        return sorted(self._games.values(), key=lambda g: g.id)

    def drop(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None


def _check_board_quota(board: list[Word], *, words_per_team: int) -> None:
    # words_left starts at the quota, so each team needs exactly that many words.
    counts = Counter(w.kind for w in board)
    for kind in (WordKind.team1, WordKind.team2):
        if counts[kind] != words_per_team:
            raise ValueError(f"Board must have {words_per_team} {kind.value} words (got {counts[kind]})")


def create_game(
    *,
    registry: SessionRegistry,
    settings: Settings,
    name: str,
    room_url: str,
    room_name: str,
    words: list[str] | None = None,
    board: list[Word] | None = None,
    seed: int | None = None,
) -> Game:
    """Build a board and register a new Game for `room_name`.

    A ready-made `board` must hold `words_per_team` words for each team;
    otherwise one is dealt from `words`
    (or the bundled word list) with a seeded rng.
    """

    if not room_name:
        raise ValueError("room_name is required")

    gid = session_id_for(domain=settings.room_domain, room_name=room_name)
    if registry.get(gid) is not None:
        raise ValueError(f"Game already exists for room {room_name}")

    if board is None:
        if seed is None:
            seed = random.SystemRandom().randint(1, 2**31 - 1)
        rng = random.Random(seed)
        board = deal_board(
            words if words is not None else load_word_list(),
            rng=rng,
            words_per_team=settings.words_per_team,
            neutral_count=settings.neutral_words,
        )
    else:
        _check_board_quota(board, words_per_team=settings.words_per_team)

    game = Game(
        name,
        room_url,
        room_name,
        board,
        domain=settings.room_domain,
        words_per_team=settings.words_per_team,
    )
    registry.add(game)
    logger.info("created game %s (%d words, seed=%s)", game.id, len(game.board), seed)
    return game


_REGISTRY: SessionRegistry | None = None


def get_registry() -> SessionRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = SessionRegistry()
    return _REGISTRY


def reset_registry_for_tests() -> None:
    """Drop every registered game. Intended for tests."""

    global _REGISTRY
    _REGISTRY = None
