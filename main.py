"""
NutritionTracker FastAPI Application
Main entry point: application factory, middleware, and configuration wiring
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import auth, users, goals, meals, entries, summaries, health
from api.middleware import (
    RequestLoggingMiddleware,
    app_error_handler,
    validation_exception_handler,
    http_exception_handler,
    database_exception_handler,
    general_exception_handler,
)
from app.config import Settings, settings as default_settings
from app.exceptions import AppError
from domain.models import Database

_logger = logging.getLogger("nutrition_tracker.main")


async def init_database_with_retry(database: Database, settings: Settings) -> None:
    """Create tables, retrying while the database comes up"""
    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(database.init_database)
            _logger.info("Database initialization succeeded")
            return
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Creates the schema on startup and releases pooled connections on shutdown.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")
    await init_database_with_retry(database, settings)

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        database.dispose()


def create_app(
    settings: Optional[Settings] = None, database: Optional[Database] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; the environment-loaded settings by default
        database: Persistence handle; built from ``settings.database_url`` by default
    """
    settings = settings or default_settings
    database = database or Database(settings.database_url, echo=settings.db_echo)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )

    docs_enabled = not settings.is_production()
    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=f"{settings.api_prefix}/redoc" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    for module in (auth, users, goals, meals, entries, summaries, health):
        app.include_router(module.router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development(),
        log_level=default_settings.log_level.lower(),
    )
