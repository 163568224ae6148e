"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from neon_snake.server.routes import config_router, router
from neon_snake.server.session_manager import SessionManager
from neon_snake.server.websocket import ws_router
from neon_snake.storage import DEFAULT_DATA_DIR, JsonFileStore


def create_app(data_dir: str | Path | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Best score and settings persist under *data_dir*.
    """
    store = JsonFileStore(data_dir if data_dir is not None else DEFAULT_DATA_DIR)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Neon Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(config_router)
    app.include_router(router)
    app.include_router(ws_router)
    return app
