from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from wordspy.core.game import Game
from wordspy.core.types import GameStatus


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    game_id: str
    player_id: str
    action: str


class ActionValidator(ABC):
    """A small, composable check run before an action reaches the Game."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, game: Game) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class StatusValidator(ActionValidator):
    """Validates the lifecycle status for a given action."""

    allowed: frozenset[GameStatus]

    def validate(self, *, ctx: ValidationContext, game: Game) -> None:
        if game.status == GameStatus.ended:
            raise ValueError("Game has ended")
        if game.status not in self.allowed:
            allowed = ",".join(sorted(s.value for s in self.allowed))
            raise ValueError(f"Action '{ctx.action}' not allowed while game is '{game.status.value}' (allowed: {allowed})")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[ActionValidator, ...]

    def validate(self, *, ctx: ValidationContext, game: Game) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, game=game)


_OPEN = frozenset({GameStatus.pending, GameStatus.playing})
_PLAYING = frozenset({GameStatus.playing})

# Roster actions stay open until the game ends; gameplay needs a started game.
DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "join-team": ValidatorPipeline(validators=(StatusValidator(allowed=_OPEN),)),
    "become-spymaster": ValidatorPipeline(validators=(StatusValidator(allowed=_OPEN),)),
    "word-selected": ValidatorPipeline(validators=(StatusValidator(allowed=_PLAYING),)),
    "next-turn": ValidatorPipeline(validators=(StatusValidator(allowed=_PLAYING),)),
    # Leaving is always allowed, even after the game ended.
    "leave-game": ValidatorPipeline(validators=()),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
