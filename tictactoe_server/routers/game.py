import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from tictactoe_server.exceptions import GameNotFoundError, InvalidMoveError
from tictactoe_server.models.dc_models import (
    MAX_GAME_ID,
    GameIdModel,
    GameStatsModel,
    HealthCheckModel,
    MakeMoveModel,
)
from tictactoe_server.models.schema_models import GameSchema
from tictactoe_server.services.game_db import GameService

game_router = APIRouter()


def get_game_service(request: Request) -> GameService:
    return request.app.state.game_service


def not_found(e: GameNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def invalid_move(e: InvalidMoveError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


class HealthCheckAPI:
    @staticmethod
    @game_router.get("/healthcheck", response_model=HealthCheckModel)
    async def healthcheck(request: Request):
        return HealthCheckModel(status="ok", timestamp=request.app.state.clock())


class GameAPI:
    @staticmethod
    @game_router.post("/create_game", response_model=GameSchema)
    async def create_game(game_service: GameService = Depends(get_game_service)):
        game_data = await game_service.create_game()
        logging.info(f"response: {game_data}")
        return game_data

    @staticmethod
    @game_router.post("/make_move", response_model=GameSchema)
    async def make_move(
        move: MakeMoveModel,
        game_service: GameService = Depends(get_game_service),
    ):
        logging.info(f"make_move: game_id={move.game_id}, position={move.position}")
        try:
            return await game_service.make_move(move.game_id, move.position)
        except GameNotFoundError as e:
            raise not_found(e)
        except InvalidMoveError as e:
            raise invalid_move(e)

    @staticmethod
    @game_router.get("/get_game/{game_id}", response_model=GameSchema)
    async def get_game(
        game_id: int = Path(ge=1, le=MAX_GAME_ID),
        game_service: GameService = Depends(get_game_service),
    ):
        try:
            return await game_service.get_game(game_id)
        except GameNotFoundError as e:
            raise not_found(e)

    @staticmethod
    @game_router.get("/get_games", response_model=List[GameSchema])
    async def get_games(game_service: GameService = Depends(get_game_service)):
        return await game_service.get_games()

    @staticmethod
    @game_router.post("/reset_game", response_model=GameSchema)
    async def reset_game(
        game: GameIdModel,
        game_service: GameService = Depends(get_game_service),
    ):
        logging.info(f"reset_game: game_id={game.game_id}")
        try:
            return await game_service.reset_game(game.game_id)
        except GameNotFoundError as e:
            raise not_found(e)


class GameStatsAPI:
    @staticmethod
    @game_router.get("/get_game_stats", response_model=GameStatsModel)
    async def get_game_stats(game_service: GameService = Depends(get_game_service)):
        return await game_service.get_game_stats()
