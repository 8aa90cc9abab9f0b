"""DB service layer for game lifecycle use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- CRUD helpers flush but never commit; each operation runs inside session.begin().
"""

import logging
from datetime import datetime
from typing import Callable, List

from sqlalchemy.ext.asyncio import async_sessionmaker

from tictactoe_server.converter import DataConverter
from tictactoe_server.crud import CreateData, ReadData, UpdateData
from tictactoe_server.domain.game_rules import apply_move, new_game_state
from tictactoe_server.exceptions import GameNotFoundError, InvalidMoveError
from tictactoe_server.models.dc_models import GameStatsModel
from tictactoe_server.models.schema_models import GameSchema
from tictactoe_server.stats_utils import GameStatsUtils

data_converter = DataConverter()
stats_utils = GameStatsUtils()


class GameService:
    def __init__(self, session_factory: async_sessionmaker, clock: Callable[[], datetime] = datetime.now):
        self.session_factory = session_factory
        self.clock = clock

    async def create_game(self) -> GameSchema:
        """Create a game with an empty board and X to move"""
        now = self.clock()
        async with self.session_factory() as session:
            async with session.begin():
                game = await CreateData.create_game_data(new_game_state(), now, session)
                game_data = GameSchema.model_validate(game)
        logging.info(f"Created game {game_data.id}")
        return game_data

    async def get_game(self, game_id: int) -> GameSchema:
        async with self.session_factory() as session:
            game = await ReadData.read_game_data(game_id, session)
            if game is None:
                raise GameNotFoundError(game_id)
            return GameSchema.model_validate(game)

    async def get_games(self) -> List[GameSchema]:
        """Return every game, newest first. Empty list if there are none."""
        async with self.session_factory() as session:
            games = await ReadData.read_all_game_data(session)
            return [GameSchema.model_validate(game) for game in games]

    async def make_move(self, game_id: int, position: int) -> GameSchema:
        """Apply a move for the player whose turn it is and persist the result.

        The row is read with FOR UPDATE so concurrent moves on the same game
        are serialized on databases that support row locks.

        Raises:
            GameNotFoundError: No game with this id.
            InvalidMoveError: The game is over or the cell is occupied.
        """
        async with self.session_factory() as session:
            async with session.begin():
                game = await ReadData.read_game_data(game_id, session, for_update=True)
                if game is None:
                    raise GameNotFoundError(game_id)

                current_state = data_converter.convert_gameschema_to_gamestate(
                    GameSchema.model_validate(game)
                )
                try:
                    next_state = apply_move(current_state, position)
                except InvalidMoveError as e:
                    logging.warning(f"Rejected move on game {game_id} at {position}: {e}")
                    raise

                game = await UpdateData.update_game_data(game, next_state, self.clock(), session)
                game_data = GameSchema.model_validate(game)

        logging.info(
            f"Game {game_id}: {current_state.current_player} played {position}, status={next_state.status}"
        )
        return game_data

    async def reset_game(self, game_id: int) -> GameSchema:
        """Return a game to its initial state, keeping its id and created_at"""
        async with self.session_factory() as session:
            async with session.begin():
                game = await ReadData.read_game_data(game_id, session, for_update=True)
                if game is None:
                    raise GameNotFoundError(game_id)
                game = await UpdateData.update_game_data(game, new_game_state(), self.clock(), session)
                game_data = GameSchema.model_validate(game)
        logging.info(f"Reset game {game_id}")
        return game_data

    async def get_game_stats(self) -> GameStatsModel:
        games = await self.get_games()
        return stats_utils.calculate_stats(games)
