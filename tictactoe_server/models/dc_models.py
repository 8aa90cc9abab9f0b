from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime


class PlayerModel(str, Enum):
    X = "X"  # X always moves first
    O = "O"


class GameStatusModel(str, Enum):
    in_progress = "in_progress"
    won = "won"
    draw = "draw"


# Largest value the games.id INTEGER column can hold.
MAX_GAME_ID = 2**31 - 1


class GameIdModel(BaseModel):
    game_id: int = Field(ge=1, le=MAX_GAME_ID)


class MakeMoveModel(BaseModel):
    game_id: int = Field(ge=1, le=MAX_GAME_ID)
    position: int = Field(ge=0, le=8)


class GameStatsModel(BaseModel):
    total_games: int
    x_wins: int
    o_wins: int
    draws: int
    in_progress: int


class HealthCheckModel(BaseModel):
    status: str
    timestamp: datetime
