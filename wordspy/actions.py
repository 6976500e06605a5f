from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

import redis

from wordspy.config import Settings
from wordspy.core.errors import GameError, InconsistentStateError, InvalidTurn
from wordspy.core.game import Game
from wordspy.core.types import GameStatus, Team
from wordspy.events import GameEvent, GameOverData, JoinedTeamData, SpymasterData, TurnData
from wordspy.fsm import LifecycleFSM
from wordspy.lock import game_lock
from wordspy.session_store import SessionRegistry
from wordspy.streams import Mailbox, publish_many, publish_to_mailbox
from wordspy.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)

ActionName = Literal["join-team", "become-spymaster", "word-selected", "next-turn", "leave-game"]
ACTION_NAMES: frozenset[str] = frozenset({"join-team", "become-spymaster", "word-selected", "next-turn", "leave-game"})


@dataclass(frozen=True, slots=True)
class ActionResult:
    game: Game
    events: list[GameEvent]
    mailbox_entry_ids: list[str]


def _require_str(payload: dict[str, Any], field: str) -> str:
    value = payload.get(field)
    if value is None or value == "":
        raise ValueError(f"{field} is required")
    return str(value)


def _game_data_event(game: Game) -> GameEvent:
    return GameEvent.now(type="game-data-dump", game_id=game.id, data=game.snapshot())


def _turn_event(game: Game) -> GameEvent:
    return GameEvent.now(type="next-turn", game_id=game.id, data=TurnData(current_turn=game.current_turn))


def _winner(game: Game) -> tuple[Team, Literal["all_words_found", "assassinated"]] | None:
    """Decide whether the game is over from the two TeamResult records.

    Hitting the assassin hands the win to the other team and takes precedence.
    """

    for team, result in game.team_results.items():
        if result.is_assassinated:
            return team.other, "assassinated"
    for team, result in game.team_results.items():
        if result.words_left <= 0:
            return team, "all_words_found"
    return None


def _join_team(game: Game, player_id: str, payload: dict[str, Any]) -> list[GameEvent]:
    team = Team(_require_str(payload, "team"))
    game.add_player(player_id, team)
    return [
        GameEvent.now(
            type="joined-team",
            game_id=game.id,
            data=JoinedTeamData(session_id=player_id, team_id=team, current_turn=game.current_turn),
        ),
        _game_data_event(game),
    ]


def _become_spymaster(game: Game, player_id: str, payload: dict[str, Any]) -> list[GameEvent]:
    player = game.set_spymaster(player_id)
    events = [
        GameEvent.now(
            type="new-spymaster",
            game_id=game.id,
            data=SpymasterData(spymaster_id=player.id, team_id=player.team),
        )
    ]

    if game.spymasters_ready() and game.status == GameStatus.pending:
        fsm = LifecycleFSM(game)
        fsm.start()
        fsm.sync_status_to_model()
        game.next_turn()
        logger.info("game %s started, %s goes first", game.id, game.current_turn)
        events.append(_turn_event(game))
        events.append(_game_data_event(game))

    return events


def _select_word(game: Game, player_id: str, payload: dict[str, Any]) -> list[GameEvent]:
    turn_before = game.current_turn
    result = game.select_word(_require_str(payload, "word"), player_id)

    events = [GameEvent.now(type="turn-result", game_id=game.id, data=result)]
    if game.current_turn != turn_before:
        events.append(_turn_event(game))

    outcome = _winner(game)
    if outcome is not None:
        winner, reason = outcome
        fsm = LifecycleFSM(game)
        fsm.finish()
        fsm.sync_status_to_model()
        logger.info("game %s ended: %s wins (%s)", game.id, winner, reason)
        events.append(
            GameEvent.now(
                type="game-over",
                game_id=game.id,
                data=GameOverData(winner=winner, reason=reason, scores=game.snapshot().scores),
            )
        )

    events.append(_game_data_event(game))
    return events


def _next_turn(game: Game, player_id: str, payload: dict[str, Any]) -> list[GameEvent]:
    # Only the team holding the turn may pass it.
    player = game.require_player(player_id)
    if player.team != game.current_turn:
        raise InvalidTurn()
    game.next_turn()
    return [_turn_event(game)]


def _leave_game(game: Game, player_id: str, payload: dict[str, Any]) -> list[GameEvent]:
    game.remove_player(player_id)
    return [_game_data_event(game)]


_HANDLERS = {
    "join-team": _join_team,
    "become-spymaster": _become_spymaster,
    "word-selected": _select_word,
    "next-turn": _next_turn,
    "leave-game": _leave_game,
}


def _mailbox_entries(game: Game, events: list[GameEvent]) -> list[tuple[str, dict[str, str]]]:
    entries: list[tuple[str, dict[str, str]]] = []
    for event in events:
        fields = event.to_stream_fields()
        entries.extend((Mailbox(game_id=game.id, player_id=p.id).key, fields) for p in game.players)
    return entries


def _report_error(*, r: redis.Redis, game: Game, player_id: str, err: GameError) -> None:
    event = GameEvent.now(type="srv-error", game_id=game.id, data=err.to_payload())
    publish_to_mailbox(r=r, mailbox=Mailbox(game_id=game.id, player_id=player_id), fields=event.to_stream_fields())


def dispatch_action(
    *,
    r: redis.Redis,
    registry: SessionRegistry,
    settings: Settings,
    game_id: str,
    player_id: str,
    action: ActionName | str,
    payload: dict[str, Any],
) -> ActionResult:
    """Entry point for client actions.

    Applies an action by:
    - acquiring the per-game lock
    - checking the lifecycle status for the action
    - calling the Game operation (and driving the lifecycle FSM where needed)
    - publishing the resulting events to every roster member's mailbox

    A GameError is reported to the acting player's mailbox as `srv-error` and
    re-raised; whatever the Game committed before raising stays committed.
    """

    pipe = pipeline_for_action(action)
    game = registry.require(game_id)

    with game_lock(r=r, game_id=game.id, ttl_ms=settings.lock_ttl_ms):
        pipe.validate(ctx=ValidationContext(game_id=game.id, player_id=player_id, action=action), game=game)

        try:
            events = _HANDLERS[action](game, player_id, payload)
        except GameError as err:
            logger.info("game %s: %s rejected for %s: %s", game.id, action, player_id, err)
            _report_error(r=r, game=game, player_id=player_id, err=err)
            raise
        except InconsistentStateError:
            logger.exception("game %s: inconsistent state during %s by %s", game.id, action, player_id)
            raise

        ids = publish_many(r=r, entries=_mailbox_entries(game, events))
        return ActionResult(game=game, events=events, mailbox_entry_ids=ids)


def close_game(
    *,
    r: redis.Redis,
    registry: SessionRegistry,
    settings: Settings,
    game_id: str,
) -> ActionResult:
    """Tear a session down and remove it from the registry.

    A pending game is abandoned, a playing one finished; an ended game is only
    dropped. Roster members get a final `game-data-dump` with status `ended`.
    """

    game = registry.require(game_id)

    with game_lock(r=r, game_id=game.id, ttl_ms=settings.lock_ttl_ms):
        fsm = LifecycleFSM(game)
        if game.status == GameStatus.pending:
            fsm.abandon()
        elif game.status == GameStatus.playing:
            fsm.finish()
        fsm.sync_status_to_model()

        events = [_game_data_event(game)]
        ids = publish_many(r=r, entries=_mailbox_entries(game, events))
        registry.drop(game.id)
        logger.info("game %s closed", game.id)
        return ActionResult(game=game, events=events, mailbox_entry_ids=ids)
