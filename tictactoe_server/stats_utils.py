from typing import List

from tictactoe_server.models.dc_models import GameStatsModel, GameStatusModel, PlayerModel
from tictactoe_server.models.schema_models import GameSchema


class GameStatsUtils:
    def count_wins(self, games: List[GameSchema], player: PlayerModel) -> int:
        """Count the games won by the given player

        Args:
            games (List[GameSchema]): Games to inspect
            player (PlayerModel): "X" or "O"

        Returns:
            int: Number of won games whose winner is the player
        """
        return sum(
            1 for game in games if game.status == GameStatusModel.won and game.winner == player
        )

    def count_status(self, games: List[GameSchema], status: GameStatusModel) -> int:
        return sum(1 for game in games if game.status == status)

    def calculate_stats(self, games: List[GameSchema]) -> GameStatsModel:
        """Summarize results over a collection of games"""
        return GameStatsModel(
            total_games=len(games),
            x_wins=self.count_wins(games, PlayerModel.X),
            o_wins=self.count_wins(games, PlayerModel.O),
            draws=self.count_status(games, GameStatusModel.draw),
            in_progress=self.count_status(games, GameStatusModel.in_progress),
        )
