import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware.cors import CORSMiddleware

from tictactoe_server.crud import CreateData
from tictactoe_server.db import get_engine, make_session_factory
from tictactoe_server.load_secrets import cors_origins, log_level, server_host, server_port
from tictactoe_server.routers import game
from tictactoe_server.services.game_db import GameService

logging.basicConfig(level=log_level)


def create_app(
    engine: Optional[AsyncEngine] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Build the application. Without an engine, the configured one is created at startup."""

    @asynccontextmanager
    async def lifespan(app):
        """Open the engine, create the games table if needed and wire the service.
        This function is called to start the server.
        """
        app_engine = engine if engine is not None else get_engine()
        app.state.game_service = GameService(make_session_factory(app_engine), clock=clock)
        await CreateData.create_table(app_engine)
        logging.info("Start Server")
        try:
            yield
        finally:
            await app_engine.dispose()
            logging.info("Stop Server")

    app = FastAPI(lifespan=lifespan)
    app.state.clock = clock
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(game.game_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=server_host, port=server_port)
