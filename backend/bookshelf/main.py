"""
Bookshelf API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn bookshelf.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌────────────────────┐ │
    │  │ Req ID │→│ Logging │→│ CORS │→│ JSON:API negotiate │ │
    │  └────────┘ └─────────┘ └──────┘ └────────────────────┘ │
    │                                                         │
    │  Routes:                                                │
    │  ┌──────────────────────────────┐ ┌──────────────────┐  │
    │  │ {prefix}/authors (bearer)    │ │ GET /health      │  │
    │  └──────────────────────────────┘ └──────────────────┘  │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ Validation→422 │ NotFound→404 │ Unauthorized→401  │  │
    │  │ Conflict→409 │ Malformed→400 │ DB/unexpected→500  │  │
    │  └───────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database import dispose_engine
from bookshelf.exceptions import (
    BookshelfError,
    DatabaseError,
    UnauthorizedError,
    ValidationError,
)
from bookshelf.middleware.content_negotiation import ContentNegotiationMiddleware
from bookshelf.middleware.logging import RequestLoggingMiddleware
from bookshelf.middleware.request_id import RequestIDMiddleware, request_id_var
from bookshelf.responses import error_response
from bookshelf.routes import authors, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup and by the dev-setup command.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and announce the JSON:API prefix.
    Shutdown: dispose the database engine (close all pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Bookshelf API %s starting up...", __version__)
    logger.info("JSON:API routes under %s", settings.api_prefix)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Bookshelf API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to JSON:API error documents.

    Handler hierarchy:
        ValidationError         → 422 (one error object per violation)
        UnauthorizedError       → 401 (+ WWW-Authenticate: Bearer)
        DatabaseError           → 500 (generic message, context logged)
        BookshelfError (base)   → its own status_code / error_objects()
                                  (NotFound 404, Conflict 409, Malformed 400)
        StarletteHTTPException  → routing errors (unknown path, bad method)
        Exception (fallback)    → 500

    Exception handlers NEVER expose internals in the response; details
    are logged server-side with the request ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation failed: %s", rid, exc.context.get("pointers"))
        return error_response(exc.status_code, exc.error_objects())

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unauthorized: %s", rid, exc.reason)
        return error_response(
            exc.status_code,
            exc.error_objects(),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(
            500,
            [{
                "title": "Server Error",
                "details": "An internal error occurred. Please try again later.",
            }],
        )

    @app.exception_handler(BookshelfError)
    async def handle_bookshelf_error(request: Request, exc: BookshelfError):
        rid = request_id_var.get("")
        logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.error_objects())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        title = HTTPStatus(exc.status_code).phrase
        details = exc.detail if isinstance(exc.detail, str) else title
        return error_response(
            exc.status_code,
            [{"title": title, "details": details}],
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            500,
            [{
                "title": "Server Error",
                "details": "An unexpected error occurred. Please try again or contact support.",
            }],
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Bookshelf API",
        description=(
            "JSON:API service for authors. Every request under the API prefix must "
            "send `Accept: application/vnd.api+json` and a bearer token."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → ContentNegotiation → routes
    app.add_middleware(ContentNegotiationMiddleware, path_prefix=settings.api_prefix)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(authors.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


app = create_app()
