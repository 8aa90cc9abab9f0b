from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from tictactoe_server.create_sqlite_engine import create_sqlite_engine
from tictactoe_server.crud import CreateData
from tictactoe_server.db import make_session_factory
from tictactoe_server.main import create_app
from tictactoe_server.services.game_db import GameService


class FakeClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        self.now += self.step
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
async def engine(tmp_path):
    engine = create_sqlite_engine(str(tmp_path / "test.sqlite3"))
    await CreateData.create_table(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def game_service(engine, clock):
    return GameService(make_session_factory(engine), clock=clock)


@pytest.fixture
def client(tmp_path, clock):
    app = create_app(create_sqlite_engine(str(tmp_path / "api.sqlite3")), clock=clock)
    with TestClient(app) as client:
        yield client
