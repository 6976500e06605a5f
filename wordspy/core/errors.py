from __future__ import annotations


class GameError(ValueError):
    """Recoverable rule violation raised by a Game operation.

    The orchestration layer reports these back to the originating client
    (`srv-error`); the game keeps whatever state was committed before the raise.
    """

    code = "game_error"

    def to_payload(self) -> dict[str, str]:
        return {"code": self.code, "message": str(self)}


class DuplicatePlayer(GameError):
    code = "duplicate_player"

    def __init__(self, player_id: str, team: str) -> None:
        super().__init__(f"Player {player_id} already joined {team}")
        self.player_id = player_id
        self.team = team


class PlayerNotFound(GameError):
    code = "player_not_found"

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player not found: {player_id}")
        self.player_id = player_id


class SpymasterExists(GameError):
    code = "spymaster_exists"

    def __init__(self, team: str) -> None:
        super().__init__(f"Spymaster already exists for {team}")
        self.team = team


class InvalidWord(GameError):
    code = "invalid_word"

    def __init__(self, word: str) -> None:
        super().__init__(f"Word is not on the board: {word}")
        self.word = word


class WordAlreadyRevealed(GameError):
    code = "word_already_revealed"

    def __init__(self, word: str) -> None:
        super().__init__(f"Word already revealed: {word}")
        self.word = word


class InvalidTurn(GameError):
    code = "invalid_turn"

    def __init__(self) -> None:
        super().__init__("Not your team's turn")


class InconsistentStateError(RuntimeError):
    """A record holds a value the game cannot have produced (e.g. an unknown team).

    Not a GameError: callers must let it propagate.
    """
