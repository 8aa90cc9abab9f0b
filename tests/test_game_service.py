from datetime import datetime

import pytest

from tictactoe_server.db import make_session_factory
from tictactoe_server.exceptions import CellOccupiedError, GameCompletedError, GameNotFoundError
from tictactoe_server.models.dc_models import GameStatusModel, PlayerModel
from tictactoe_server.services.game_db import GameService


async def play(game_service, game_id, positions):
    game = None
    for position in positions:
        game = await game_service.make_move(game_id, position)
    return game


class TestCreateGame:
    async def test_new_game_defaults(self, game_service):
        game = await game_service.create_game()
        assert game.id is not None
        assert game.board == [None] * 9
        assert game.current_player == PlayerModel.X
        assert game.status == GameStatusModel.in_progress
        assert game.winner is None
        assert game.created_at == game.updated_at

    async def test_ids_are_unique(self, game_service):
        first = await game_service.create_game()
        second = await game_service.create_game()
        assert first.id != second.id


class TestGetGame:
    async def test_returns_stored_game(self, game_service):
        created = await game_service.create_game()
        assert await game_service.get_game(created.id) == created

    async def test_missing_game(self, game_service):
        with pytest.raises(GameNotFoundError, match="Game with ID 999 not found"):
            await game_service.get_game(999)


class TestGetGames:
    async def test_empty_storage(self, game_service):
        assert await game_service.get_games() == []

    async def test_newest_first(self, game_service):
        created = [await game_service.create_game() for _ in range(3)]
        games = await game_service.get_games()
        assert [game.id for game in games] == [game.id for game in reversed(created)]


class TestMakeMove:
    async def test_move_is_persisted(self, game_service):
        created = await game_service.create_game()
        game = await game_service.make_move(created.id, 4)
        assert game.board[4] == PlayerModel.X
        assert game.current_player == PlayerModel.O
        assert game.updated_at > created.updated_at
        assert game.created_at == created.created_at
        assert await game_service.get_game(created.id) == game

    async def test_row_win(self, game_service):
        created = await game_service.create_game()
        game = await play(game_service, created.id, [0, 3, 1, 4, 2])
        assert game.status == GameStatusModel.won
        assert game.winner == PlayerModel.X
        assert game.current_player == PlayerModel.X

    async def test_draw(self, game_service):
        created = await game_service.create_game()
        game = await play(game_service, created.id, [0, 1, 2, 4, 3, 5, 7, 6, 8])
        assert game.status == GameStatusModel.draw
        assert game.winner is None
        assert None not in game.board

    async def test_occupied_cell_does_not_change_state(self, game_service):
        created = await game_service.create_game()
        before = await play(game_service, created.id, [3])
        with pytest.raises(CellOccupiedError):
            await game_service.make_move(created.id, 3)
        assert await game_service.get_game(created.id) == before

    async def test_completed_game_does_not_change_state(self, game_service):
        created = await game_service.create_game()
        before = await play(game_service, created.id, [0, 3, 1, 4, 2])
        with pytest.raises(GameCompletedError):
            await game_service.make_move(created.id, 8)
        assert await game_service.get_game(created.id) == before

    async def test_missing_game(self, game_service):
        with pytest.raises(GameNotFoundError):
            await game_service.make_move(42, 0)


class TestResetGame:
    async def test_reset_won_game(self, game_service):
        created = await game_service.create_game()
        won = await play(game_service, created.id, [0, 3, 1, 4, 2])
        game = await game_service.reset_game(created.id)
        assert game.id == created.id
        assert game.board == [None] * 9
        assert game.current_player == PlayerModel.X
        assert game.status == GameStatusModel.in_progress
        assert game.winner is None
        assert game.created_at == created.created_at
        assert game.updated_at > won.updated_at

    async def test_reset_fresh_game_matches_creation(self, game_service):
        created = await game_service.create_game()
        game = await game_service.reset_game(created.id)
        assert game.model_dump(exclude={"updated_at"}) == created.model_dump(exclude={"updated_at"})

    async def test_game_is_playable_after_reset(self, game_service):
        created = await game_service.create_game()
        await play(game_service, created.id, [0, 3, 1, 4, 2])
        await game_service.reset_game(created.id)
        game = await game_service.make_move(created.id, 0)
        assert game.board[0] == PlayerModel.X
        assert game.current_player == PlayerModel.O

    async def test_missing_game(self, game_service):
        with pytest.raises(GameNotFoundError):
            await game_service.reset_game(7)


class TestGameStats:
    async def test_counts_by_result(self, game_service):
        x_win = await game_service.create_game()
        await play(game_service, x_win.id, [0, 3, 1, 4, 2])
        o_win = await game_service.create_game()
        await play(game_service, o_win.id, [1, 0, 2, 3, 4, 6])
        draw = await game_service.create_game()
        await play(game_service, draw.id, [0, 1, 2, 4, 3, 5, 7, 6, 8])
        await game_service.create_game()

        stats = await game_service.get_game_stats()
        assert stats.total_games == 4
        assert stats.x_wins == 1
        assert stats.o_wins == 1
        assert stats.draws == 1
        assert stats.in_progress == 1

    async def test_empty(self, game_service):
        stats = await game_service.get_game_stats()
        assert stats.total_games == 0
        assert stats.x_wins == stats.o_wins == stats.draws == stats.in_progress == 0


class ReplayClock:
    """Returns the given times in order."""

    def __init__(self, times):
        self.times = iter(times)

    def __call__(self) -> datetime:
        return next(self.times)


class TestGetGamesOrdering:
    async def test_orders_by_created_at_not_id(self, engine):
        clock = ReplayClock([datetime(2024, 1, 2), datetime(2024, 1, 1), datetime(2024, 1, 3)])
        game_service = GameService(make_session_factory(engine), clock=clock)
        middle = await game_service.create_game()
        oldest = await game_service.create_game()
        newest = await game_service.create_game()
        assert oldest.id > middle.id

        games = await game_service.get_games()
        assert [game.id for game in games] == [newest.id, middle.id, oldest.id]
