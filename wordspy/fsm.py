from __future__ import annotations

from statemachine import State, StateMachine

from wordspy.core.game import Game
from wordspy.core.types import GameStatus


class LifecycleFSM(StateMachine):
    """FSM wrapper around a Game's lifecycle status.

    The Game never moves its own status; the orchestration layer does, through here:
    - pending -> playing once both spymasters are claimed
    - playing -> ended when a team clears its words or hits the assassin
    - pending -> ended when a session is torn down before it starts
    """

    pending = State(GameStatus.pending.value, value=GameStatus.pending.value, initial=True)
    playing = State(GameStatus.playing.value, value=GameStatus.playing.value)
    ended = State(GameStatus.ended.value, value=GameStatus.ended.value, final=True)

    start = pending.to(playing)
    finish = playing.to(ended)
    abandon = pending.to(ended)

    def __init__(self, game: Game):
        self.game = game
        super().__init__(start_value=game.status.value)

    def sync_status_to_model(self) -> None:
        self.game.status = GameStatus(str(self.current_state_value))
