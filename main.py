"""
Todo API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_error_handlers
from api.health import router as health_router
from api.middleware import register_middleware
from api.todos import router as todos_router
from api.users import router as users_router
from auth.tokens import TokenService
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Creating tables…")
        await create_tables(app.state.engine)
        logger.info("Application ready to accept requests.")
        yield
        await app.state.engine.dispose()

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        description="Per-user todo lists behind bearer-token auth.",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret, settings.jwt_expiry_seconds,
    )

    register_middleware(app, settings)
    register_error_handlers(app)

    # Routes
    app.include_router(health_router, prefix="/api")
    app.include_router(users_router, prefix="/api/users")
    app.include_router(todos_router, prefix="/api/todos")

    return app


app = create_app()

if __name__ == "__main__":
    _settings = app.state.settings
    uvicorn.run(
        "main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
        log_level="debug" if _settings.debug else "info",
    )
