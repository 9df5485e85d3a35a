"""
BrandAgent Backend - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds the Store and AuthService for that settings
       object, attaches them to app.state, registers middleware, exception
       handlers and routers.
Who:   uvicorn (`brandagent.main:app`), the `brandagent` console script, tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │   POST /api/register   POST /api/login              │
    │   POST /api/submit     GET  /api/submissions (admin)│
    │   GET  /api/users (admin)   GET /health             │
    │                                                     │
    │  Exception Handlers:                                │
    │   Validation/Conflict→400  Auth→401  Forbidden→403  │
    │   Internal/unexpected→500 (generic message)         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (no JWT_SECRET → ConfigurationError, no serving)
    3. Create missing tables
    4. Seed demo accounts (idempotent, by email)

    Shutdown:
    1. Dispose the store's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brandagent import __version__
from brandagent.config import Settings, settings as default_settings
from brandagent.database import Store
from brandagent.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    InternalError,
    ValidationError,
)
from brandagent.middleware.logging import RequestLoggingMiddleware
from brandagent.middleware.request_id import RequestIDMiddleware, request_id_var
from brandagent.routes import auth, health, submissions, users
from brandagent.services.auth_service import AuthService
from brandagent.services.user_service import user_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s to stdout
    (Docker captures stdout). Chatty third-party loggers are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # passlib logs a bcrypt version-probe warning on first use
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, config validation, schema, demo seed.
    Shutdown: dispose the store.

    A ConfigurationError propagates out of the lifespan, so uvicorn aborts
    startup instead of serving with a missing signing secret.
    """
    app_settings: Settings = app.state.settings
    store: Store = app.state.store

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("BrandAgent Backend starting up...")

    try:
        app_settings.validate_required()
    except Exception as e:
        logger.critical("%s", e)
        await store.dispose()
        raise

    await store.create_schema()
    logger.info("Store ready: %s", store.engine.url.render_as_string(hide_password=True))

    if app_settings.seed_demo_accounts:
        inserted = await user_service.seed_demo_accounts(store, app.state.auth_service)
        logger.info("Demo accounts checked (%d inserted)", inserted)

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("BrandAgent Backend shutting down...")
    await store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    rid = request_id_var.get("")
    # Why set the header here too: the Exception handler runs in Starlette's
    # ServerErrorMiddleware, outside RequestIDMiddleware, so nothing else
    # would stamp X-Request-ID on an unexpected 500
    headers = {"X-Request-ID": rid} if rid else None
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": rid},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and `{"error": message}` bodies.

    Handler hierarchy:
        ValidationError, RequestValidationError  → 400
        ConflictError                            → 400
        AuthError                                → 401
        ForbiddenError                           → 403
        InternalError                            → 500 (generic message)
        Exception (fallback)                     → 500 (generic message)

    Security: 500 responses never carry the underlying error. Details and
    stack traces are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Body is not JSON, or a field has the wrong JSON type
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), exc.errors())
        return _error_response(400, "invalid request body")

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(400, exc.message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        return _error_response(401, exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return _error_response(403, exc.message)

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error(
            "[%s] Internal error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, "internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=exc,
        )
        return _error_response(500, "internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call gets its own Store and AuthService, so tests can build an app
    against a throwaway database without touching module globals.
    Nothing here touches the database; that happens in the lifespan.
    """
    app_settings = settings or default_settings

    app = FastAPI(
        title="BrandAgent API",
        description="Account registration, login and submission storage with admin-only listing.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.store = Store(app_settings.database_url, echo=app_settings.log_level == "DEBUG")
    app.state.auth_service = AuthService(app_settings)

    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(submissions.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the default app on HOST:PORT."""
    import uvicorn

    uvicorn.run(
        "brandagent.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


app = create_app()
