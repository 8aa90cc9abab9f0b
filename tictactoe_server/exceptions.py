class GameNotFoundError(LookupError):
    """Raised when the requested game id does not exist."""

    def __init__(self, game_id: int):
        self.game_id = game_id
        super().__init__(f"Game with ID {game_id} not found")


class InvalidMoveError(ValueError):
    """Raised when a move is rejected. The stored game is never modified."""


class GameCompletedError(InvalidMoveError):
    def __init__(self):
        super().__init__("Cannot make move on a completed game")


class CellOccupiedError(InvalidMoveError):
    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Position {position} is already occupied")
