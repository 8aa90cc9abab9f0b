from typing import List, Optional

from tictactoe_server.domain.game_rules import GameState
from tictactoe_server.models.dc_models import GameStatusModel, PlayerModel
from tictactoe_server.models.schema_models import GameSchema


def _mark_value(mark: Optional[PlayerModel]) -> Optional[str]:
    return None if mark is None else PlayerModel(mark).value


class DataConverter:
    """This class is used to convert data between the stored game and the domain state."""

    def convert_gameschema_to_gamestate(self, game_data: GameSchema) -> GameState:
        """Convert the GameSchema to the GameState used by the game rules

        Args:
            game_data (GameSchema): The game as read from the database

        Returns:
            GameState: Board, current player, status and winner as plain values
        """
        return GameState(
            board=tuple(_mark_value(cell) for cell in game_data.board),
            current_player=_mark_value(game_data.current_player),
            status=GameStatusModel(game_data.status).value,
            winner=_mark_value(game_data.winner),
        )

    def convert_gamestate_to_board(self, state: GameState) -> List[Optional[str]]:
        """Convert the GameState board to the JSON list stored in the games table"""
        return list(state.board)
