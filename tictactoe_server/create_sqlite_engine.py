from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tictactoe_server.load_secrets import sqlite_path


def create_sqlite_engine(file_path: str = sqlite_path, echo: bool = False) -> AsyncEngine:
    """Create an aiosqlite engine for a database file."""
    sqlite_url = f"sqlite+aiosqlite:///{file_path}"
    return create_async_engine(url=sqlite_url, echo=echo)
