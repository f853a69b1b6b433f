"""
FastAPI Application Entry Point.
Owns: App factory, lifespan wiring, router mounting, middleware setup, server start.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from app.api.auth import PasswordHasher, TokenService
from app.api.config import Settings, get_settings
from app.api.db import (
    ExpenseStore,
    UserStore,
    create_engine,
    create_schema,
    create_session_factory,
    ping,
)
from app.api.errors import register_exception_handlers
from app.api.middleware import CorrelationMiddleware, LoggingMiddleware
from app.api.routes import expenses_router, health_router, users_router
from app.api.services import ExpenseService, UserService
from shared.logging import configure_root_logger

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    configure_root_logger("api", settings.log_level)


def build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_engine(settings)
        try:
            await ping(engine, settings.db_timeout_seconds)
            if settings.db_create_schema:
                await create_schema(engine)
        except Exception:
            logger.exception("Database unavailable at startup")
            await engine.dispose()
            raise
        logger.info("Connected to database")

        sessions = create_session_factory(engine)
        timeout = settings.db_timeout_seconds
        app.state.expense_service = ExpenseService(ExpenseStore(sessions, timeout))
        app.state.user_service = UserService(
            UserStore(sessions, timeout),
            PasswordHasher(settings.bcrypt_rounds),
            app.state.token_service,
        )

        try:
            yield
        finally:
            await engine.dispose()
            logger.info("Database pool closed")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Expense Tracker API",
        version="1.0.0",
        docs_url="/docs" if settings.service_env != "prod" else None,
        redoc_url="/redoc" if settings.service_env != "prod" else None,
        openapi_url="/openapi.json" if settings.service_env != "prod" else None,
        lifespan=build_lifespan(settings),
    )

    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)

    # Middleware (last added = outermost, so correlation ids exist before logging)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(expenses_router)

    return app


def run() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_root_logger("api")
        missing = ", ".join(str(err["loc"][0]) for err in e.errors())
        logger.error(f"Failed to load config: {missing}")
        sys.exit(1)

    configure_logging(settings)
    logger.info("Config loaded")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    run()
