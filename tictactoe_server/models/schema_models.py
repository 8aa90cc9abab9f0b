from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from tictactoe_server.models.dc_models import GameStatusModel, PlayerModel


class GameSchema(BaseModel):
    id: int
    board: List[Optional[PlayerModel]] = Field(min_length=9, max_length=9)
    current_player: PlayerModel
    status: GameStatusModel
    winner: Optional[PlayerModel] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
