#!/usr/bin/env python3

"""
Main application entry point for the message board service.

Architecture: FastAPI application with an async SQLAlchemy store, cookie
sessions and a static front-end.
Key Features: Lifecycle management, database health checks, uniform JSON
errors, optional CORS configuration.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from message_board.api.auth import router as auth_router
from message_board.api.messages import router as messages_router
from message_board.config import settings
from message_board.db import check_db_connection, close_db, init_db
from message_board.errors import (
    InvalidInput,
    MessageBoardError,
    NotFound,
    StorageError,
)
from message_board.services.session_manager import SessionManager
from message_board.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open storage and the session store on startup; close them on shutdown."""
    logger.info("Application startup...")
    try:
        logger.info("Initializing database...")
        await init_db()

        logger.info("Checking database connectivity...")
        await check_db_connection()

        await SessionManager().purge_expired()
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Message board startup successful.")

    yield

    logger.info("Message board shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def error_response(exc: MessageBoardError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app():
    app = FastAPI(title="Message Board API", lifespan=lifespan)

    @app.exception_handler(MessageBoardError)
    async def message_board_error_handler(request: Request, exc: MessageBoardError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "code": code},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(InvalidInput())

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Storage error on {request.url.path}: {exc}", exc_info=True)
        return error_response(StorageError())

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(f"OSError caught on {request.url.path}: {exc}, errno: {exc.errno}")
        return error_response(StorageError())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error.", "code": "internal_error"},
        )

    app.include_router(auth_router)
    app.include_router(messages_router)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Relative paths are taken from the project root
    static_dir = Path(__file__).resolve().parent / settings.static_dir

    @app.get("/", include_in_schema=False)
    async def index():
        index_file = static_dir / "index.html"
        if not index_file.is_file():
            raise NotFound("Page not found.")
        return FileResponse(index_file)

    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")
        logger.info(f"Serving static files from {static_dir.resolve()}")
    else:
        logger.warning(f"Static directory {static_dir} not found; front-end disabled")

    return app


app = create_app()


def main():
    """Start the message board server."""
    host = settings.server_host
    port = int(settings.port)

    logger.info(f"Starting message board server on {host}:{port}")

    try:
        uvicorn.run(app, host=host, port=port)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
