from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, desc
from datetime import datetime
from typing import List
import logging

from tictactoe_server.converter import DataConverter
from tictactoe_server.domain.game_rules import GameState
from tictactoe_server.models.schemas import Base, Game

data_converter = DataConverter()


class CreateData:
    @staticmethod
    async def create_table(engine: AsyncEngine) -> None:
        """Create table if not exists"""
        async with engine.begin() as conn:
            # Existing tables are skipped
            await conn.run_sync(Base.metadata.create_all)

    @staticmethod
    async def create_game_data(state: GameState, created_at: datetime, session: AsyncSession) -> Game:
        """Insert a new game row. The id is assigned by the database.

        Args:
            state (GameState): Initial board, player, status and winner
            created_at (datetime): Used for both created_at and updated_at
            session (AsyncSession): AsyncSession object to interact with database

        Returns:
            Game: The inserted row with its id populated
        """
        try:
            new_game = Game(
                board=data_converter.convert_gamestate_to_board(state),
                current_player=state.current_player,
                status=state.status,
                winner=state.winner,
                created_at=created_at,
                updated_at=created_at,
            )
            session.add(new_game)
            await session.flush()
            return new_game
        except SQLAlchemyError as e:
            logging.error(f"Failed to create game data: {e}")
            raise


class ReadData:
    @staticmethod
    async def read_game_data(game_id: int, session: AsyncSession, for_update: bool = False) -> Game | None:
        """Read a game row

        Args:
            game_id (int): To identify the game
            for_update (bool): Lock the row until the transaction ends

        Returns:
            Game | None: The game row, None if it does not exist
        """
        try:
            stmt = select(Game).where(Game.id == game_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await session.execute(stmt)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game data: {e}")
            raise

    @staticmethod
    async def read_all_game_data(session: AsyncSession) -> List[Game]:
        """Read every game, most recently created first"""
        try:
            stmt = select(Game).order_by(desc(Game.created_at), desc(Game.id))
            result = await session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game list: {e}")
            raise


class UpdateData:
    @staticmethod
    async def update_game_data(game: Game, state: GameState, updated_at: datetime, session: AsyncSession) -> Game:
        """Overwrite the mutable fields of a game row. created_at is never touched.

        Args:
            game (Game): Row previously read in the same session
            state (GameState): New board, player, status and winner
            updated_at (datetime): Time of the state change
        """
        try:
            game.board = data_converter.convert_gamestate_to_board(state)
            game.current_player = state.current_player
            game.status = state.status
            game.winner = state.winner
            game.updated_at = updated_at
            await session.flush()
            return game
        except SQLAlchemyError as e:
            logging.error(f"Failed to update game data: {e}")
            raise
