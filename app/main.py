"""
Words API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
Who:   uvicorn imports `app.main:app` (see Procfile).

Application Architecture:
    ┌─────────────────────────────────────────────┐
    │                 FastAPI App                 │
    │                                             │
    │  Middleware:  Request ID → Logging → CORS   │
    │                                             │
    │  Routes:      GET /words    POST /words     │
    │                                             │
    │  Exception Handlers:                        │
    │      StorageError → 500   Exception → 500   │
    └─────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Log the active environment and database target (no password)
       The database is NOT contacted here; see app.database on lazy failure.

    Shutdown:
    1. Dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import connection_config, dispose_engine
from app.exceptions import StorageError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import words

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure process-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout; the hosting platform collects it from there.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo is handled by the engine
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup logging, then pool disposal on shutdown."""
    setup_logging()
    logger.info("Words API %s starting (environment=%s)", __version__, connection_config.environment)
    logger.info(
        "Database: %s (encrypted=%s)",
        connection_config.url.render_as_string(hide_password=True),
        connection_config.encrypted,
    )
    logger.info("Listening on http://%s:%s", settings.host, settings.port)

    yield

    logger.info("Words API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _server_error(rid: str) -> JSONResponse:
    """Generic 500 body; never includes the underlying error text."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "server_error",
            "message": "An internal error occurred.",
            "request_id": rid,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        StorageError          → 500 (details logged, generic body)
        Exception (fallback)  → 500, full stack trace logged

    Pydantic body-shape errors keep FastAPI's default 422.
    """

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error(rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _server_error(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call; they all share the one engine from
    app.database.
    """
    app = FastAPI(
        title="Words API",
        description="List and add Chinese / pinyin / English vocabulary entries.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(words.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
