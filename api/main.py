from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import settings as app_settings
from core.db import Database
from core.errors import AppError
from core.log import configure_logging
from schools import router as schools_router
from schools.repository import PostgresSchoolRepository, SchoolRepository, ensure_schema

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "POST /addSchool",
    "GET /listSchools?latitude=<lat>&longitude=<lon>",
    "GET /school/:id",
    "PUT /school/:id",
    "DELETE /school/:id",
    "GET /health",
]


def _envelope(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _register_exception_handlers(app: FastAPI, settings: app_settings.Settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown path or unsupported method on a known path.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _envelope(
                status.HTTP_404_NOT_FOUND,
                "API endpoint not found",
                availableEndpoints=AVAILABLE_ENDPOINTS,
            )
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
        if settings.is_production:
            return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", error=str(exc))


def create_app(
    *,
    settings: app_settings.Settings | None = None,
    repository: SchoolRepository | None = None,
) -> FastAPI:
    settings = settings or app_settings.load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if repository is not None:
            yield
            return

        # Open the DB handle once per process; startup fails if it cannot connect.
        database = Database(
            app_settings.database_url(),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )
        await database.connect()
        try:
            await ensure_schema(database)
            app.state.repository = PostgresSchoolRepository(database)
            logger.info("startup_complete environment=%s port=%s", settings.environment, settings.port)
            yield
        finally:
            await database.close()
            logger.info("shutdown_complete")

    app = FastAPI(title="School Management API", lifespan=lifespan)
    app.state.settings = settings
    if repository is not None:
        app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)
    app.include_router(schools_router.router, tags=["schools"])

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        timestamp = datetime.now(timezone.utc).isoformat()
        connected = await request.app.state.repository.ping()
        if not connected:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "success": False,
                    "message": "Database connection failed",
                    "database": "disconnected",
                    "timestamp": timestamp,
                },
            )
        return JSONResponse(
            content={
                "success": True,
                "message": "School Management API is running",
                "database": "connected",
                "timestamp": timestamp,
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    current = app.state.settings
    uvicorn.run(app, host=current.host, port=current.port, log_level=current.log_level.lower())
