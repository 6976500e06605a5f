from __future__ import annotations

import logging
from collections.abc import Iterable

from wordspy.core.errors import (
    DuplicatePlayer,
    InconsistentStateError,
    InvalidTurn,
    InvalidWord,
    PlayerNotFound,
    SpymasterExists,
    WordAlreadyRevealed,
)
from wordspy.core.types import GameData, GameStatus, Player, Team, TeamResult, TurnResult, Word, WordKind

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PER_TEAM = 9


def session_id_for(*, domain: str, room_name: str) -> str:
    return f"{domain}-{room_name}"


class Game:
    """Authoritative in-memory state for one session.

    Not safe for concurrent use: callers serialize access per game
    (see `wordspy.lock.game_lock`). Lifecycle `status` is set by the caller;
    no operation here moves it.
    """

    def __init__(
        self,
        name: str,
        room_url: str,
        room_name: str,
        board: Iterable[Word],
        *,
        domain: str,
        words_per_team: int = DEFAULT_WORDS_PER_TEAM,
    ) -> None:
        self.id = session_id_for(domain=domain, room_name=room_name)
        self.name = name
        self.room_url = room_url
        self.room_name = room_name
        self.status = GameStatus.pending

        self._board: tuple[Word, ...] = tuple(board)
        self.players: list[Player] = []

        self._spymaster_ids: dict[Team, str | None] = {Team.team1: None, Team.team2: None}
        self.current_turn: Team | None = None
        self.team_results: dict[Team, TeamResult] = {
            team: TeamResult(team=team, words_left=words_per_team) for team in Team
        }

    @property
    def board(self) -> tuple[Word, ...]:
        return self._board

    # --- roster -----------------------------------------------------------

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def require_player(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        return player

    def add_player(self, player_id: str, team: Team) -> Player:
        existing = self.get_player(player_id)
        if existing is not None:
            raise DuplicatePlayer(existing.id, existing.team)

        player = Player(id=player_id, team=team)
        self.players.append(player)
        logger.debug("game %s: %s joined %s", self.id, player_id, team)
        return player

    def remove_player(self, player_id: str) -> Player:
        # Leaves the team's spymaster claim in place.
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                del self.players[idx]
                logger.debug("game %s: %s left", self.id, player_id)
                return p
        raise PlayerNotFound(player_id)

    def set_spymaster(self, player_id: str) -> Player:
        player = self.require_player(player_id)
        team = player.team
        if team not in self._spymaster_ids:
            logger.error("game %s: player %s has unrecognized team %r", self.id, player_id, team)
            raise InconsistentStateError(f"player team unrecognized: {team}")

        if self._spymaster_ids[team]:
            raise SpymasterExists(team)

        self._spymaster_ids[team] = player_id
        player.is_spymaster = True
        logger.debug("game %s: %s is spymaster for %s", self.id, player_id, team)
        return player

    def spymaster_id(self, team: Team) -> str | None:
        return self._spymaster_ids.get(team)

    def spymasters_ready(self) -> bool:
        return all(self._spymaster_ids.values())

    # --- turns and words ----------------------------------------------------

    def next_turn(self) -> Team:
        if self.current_turn is None or self.current_turn == Team.team2:
            self.current_turn = Team.team1
        else:
            self.current_turn = Team.team2
        logger.debug("game %s: turn -> %s", self.id, self.current_turn)
        return self.current_turn

    def select_word(self, word_value: str, player_id: str) -> TurnResult:
        """Reveal `word_value` on behalf of `player_id` and score it.

        The word is revealed before the turn check, so an out-of-turn pick
        still burns the word and then raises InvalidTurn.

        Scoring applies to the selecting team only: its own word or an
        opponent word both decrement its `words_left`; the assassin sets
        `is_assassinated`; neutral changes nothing. Any pick other than the
        team's own word passes the turn.
        """

        word = next((w for w in self._board if w.word == word_value), None)
        if word is None:
            raise InvalidWord(word_value)
        if word.is_revealed:
            raise WordAlreadyRevealed(word.word)

        player = self.require_player(player_id)

        word.is_revealed = True

        if player.team != self.current_turn:
            logger.debug("game %s: %s revealed %s out of turn", self.id, player_id, word.word)
            raise InvalidTurn()

        result = self.team_results[player.team]
        correct = word.matches_team(player.team)
        if correct:
            result.words_left -= 1
        elif word.kind == WordKind.assassin:
            result.is_assassinated = True
        elif word.kind != WordKind.neutral:
            result.words_left -= 1

        logger.debug(
            "game %s: %s (%s) selected %s [%s], words_left=%d assassinated=%s",
            self.id,
            player_id,
            player.team,
            word.word,
            word.kind,
            result.words_left,
            result.is_assassinated,
        )

        if not correct:
            self.next_turn()

        return TurnResult(team=player.team, last_revealed_word=word)

    def get_revealed_word_vals(self) -> list[str]:
        return [w.word for w in self._board if w.is_revealed]

    # --- reporting ----------------------------------------------------------

    def team_result(self, team: Team) -> TeamResult:
        return self.team_results[team]

    def snapshot(self) -> GameData:
        return GameData(
            game_id=self.id,
            name=self.name,
            status=self.status,
            players=[p.model_copy() for p in self.players],
            current_turn=self.current_turn,
            revealed_word_vals=self.get_revealed_word_vals(),
            scores={team: r.model_copy() for team, r in self.team_results.items()},
        )
