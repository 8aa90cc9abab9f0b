from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import Integer, DateTime, Enum, JSON
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime

from tictactoe_server.models.dc_models import GameStatusModel, PlayerModel


class Base(DeclarativeBase):
    pass


player_enum = Enum(PlayerModel, name="player")


class Game(Base):
    __tablename__ = "games"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # JSON array of 9 cells (null | "X" | "O")
    board = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    current_player = Column(player_enum, nullable=False)
    status = Column(Enum(GameStatusModel, name="game_status"), nullable=False)
    winner = Column(player_enum, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)
