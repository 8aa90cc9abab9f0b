from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tictactoe_server.create_postgres_engine import create_postgres_engine
from tictactoe_server.create_sqlite_engine import create_sqlite_engine
from tictactoe_server.load_secrets import db_backend


def get_engine() -> AsyncEngine:
    """Return a new engine for the configured DB_BACKEND."""
    if db_backend == "sqlite":
        return create_sqlite_engine()
    return create_postgres_engine()


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    # Rows stay loaded after commit (expire_on_commit=False).
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )
