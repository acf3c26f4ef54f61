"""
Anekazoo Animals API - FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; `app` below is the
       instance uvicorn serves (uvicorn anekazoo.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Access Log  │→│  GZip    │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /animals, /animals/{id}      │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Conflict→409 │ NotFound→404  │  │
    │  │ Storage→500    │ anything else→500            │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the engine from settings (skipped when a store was injected)
    3. Create the animals table if missing
    4. Verify the store answers; any failure aborts startup
    5. Publish the SQLAnimalStore on app.state

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from anekazoo import __version__
from anekazoo.config import settings
from anekazoo.database import (
    bootstrap_schema,
    build_engine,
    build_session_factory,
    dispose_engine,
    verify_connection,
)
from anekazoo.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from anekazoo.middleware.logging import RequestLoggingMiddleware
from anekazoo.routes import animals, health
from anekazoo.services.animal_store import SQLAnimalStore
from anekazoo.services.store_base import AnimalStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party loggers that report every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: build the store unless one was injected. Shutdown: release it.

    Any error while bootstrapping the schema or reaching the store propagates
    out of startup, so the process never serves requests without a store.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Anekazoo API %s starting up...", __version__)

    engine = None
    if getattr(app.state, "animal_store", None) is None:
        engine = build_engine()
        try:
            await bootstrap_schema(engine)
            await verify_connection(engine)
        except Exception:
            logger.critical("Store unavailable at startup; refusing to start.")
            await dispose_engine(engine)
            raise
        app.state.animal_store = SQLAnimalStore(build_session_factory(engine))

    logger.info("Server is running on port %d", settings.backend_port)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Anekazoo API shutting down...")
    if engine is not None:
        await dispose_engine(engine)
        app.state.animal_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 Bad Request (body could not be decoded)
        ValidationError         → 400 Bad Request
        ConflictError           → 409 Conflict
        NotFoundError           → 404 Not Found
        StorageError            → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Driver details stay in the server log; responses carry only the message.
    """

    def validation_error_response(exc: ValidationError) -> JSONResponse:
        logger.warning("Validation error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI could not decode the body; answered as 400 instead of FastAPI's 422."""
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return validation_error_response(
            ValidationError(message="Invalid input", context={"errors": errors})
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return validation_error_response(exc)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(
            status_code=409,
            content={
                "error": "conflict",
                "message": exc.message,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
            },
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Store failure: message to the client, context to the log."""
        logger.error("Storage error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the traceback is logged server-side only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[AnimalStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Persistence component to serve requests with. When omitted,
            the lifespan builds a SQLAnimalStore from settings at startup.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="Anekazoo Animals API",
        description="CRUD service for animals backed by a relational store.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.animal_store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: Access Log → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(animals.router)
    app.include_router(health.router)

    return app


# uvicorn expects `anekazoo.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn on the configured address."""
    import uvicorn

    uvicorn.run(
        "anekazoo.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
