"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jersey_store.api import api_router
from jersey_store.api.middleware import MethodOverrideMiddleware
from jersey_store.api.presentation import render_not_found, render_server_error
from jersey_store.core.config import Settings, settings
from jersey_store.core.logging_config import setup_logging
from jersey_store.database import Database
from jersey_store.services import CatalogService, CatalogStore, allow_all
from jersey_store.services.catalog_service import AuthorizePolicy

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None,
    authorize: AuthorizePolicy = allow_all,
) -> FastAPI:
    """
    Build the application for a settings object.

    Args:
        app_settings: Settings to use, defaults to the environment-loaded ones
        authorize: Authorization policy for admin actions, open by default

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL, app_settings.LOG_FILE)

    database = Database(app_settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting %s %s", app_settings.PROJECT_NAME, app_settings.VERSION)
        try:
            database.init_db()
            logger.info("Database ready")
        except SQLAlchemyError:
            # Keep serving; requests report the catalog as unavailable
            logger.exception("Database initialization failed")

        yield

        logger.info("Shutting down")
        database.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        description=app_settings.DESCRIPTION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = database
    app.state.catalog_service = CatalogService(
        CatalogStore(database),
        timeout=app_settings.REQUEST_TIMEOUT_SECONDS,
        authorize=authorize,
    )

    app.add_middleware(MethodOverrideMiddleware)
    app.include_router(api_router)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            return render_not_found(request)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return render_server_error(request)

    @app.get("/health", tags=["Health"])
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy" if database.ping() else "degraded"}

    return app


app = create_app()
