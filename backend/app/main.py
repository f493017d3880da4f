"""
Pokedex Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the JSON store and the Pokemon service, registers
       middleware, exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn app.main:app`), the `pokedex-api` console script,
       and the test suite (which builds apps over temporary data files).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:      /api/pokemon[/{id}]   /health   /     │
    │  Docs:        /api-docs   /api-docs.json            │
    │                                                     │
    │  Exception Handlers:                                │
    │    PokedexError → its status   404/405 → 404        │
    │    RequestValidationError → 400   Exception → 500   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.exceptions import (
    MalformedRequestError,
    PokedexError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import error_response
from app.routes import health, pokemon
from app.services.pokemon_service import PokemonService
from app.services.store import JsonFileStore

logger = logging.getLogger(__name__)

# Context keys that hold the underlying cause of a storage failure
_DIAGNOSTIC_KEYS = ("os_error", "decode_error", "encode_error")


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] app.services.pokemon_service: Created Pokemon 7 (Mew)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, make sure the collection file exists.
    Shutdown: log only; the store holds no open handles between requests.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Pokedex API %s starting up (%s)", __version__, app_settings.environment)

    store: JsonFileStore = app.state.store
    store.ensure_exists()
    logger.info("Data file: %s", store.path.resolve())
    logger.info("API docs: http://%s:%d/api-docs", app_settings.backend_host, app_settings.port)

    yield

    logger.info("Pokedex API shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _diagnostic(exc: PokedexError) -> Optional[str]:
    for key in _DIAGNOSTIC_KEYS:
        if key in exc.context:
            return str(exc.context[key])
    return None


def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """
    Map every failure to the `{success: false, ...}` envelope.

    Handler table:
        ValidationError         → 400 with `errors` list
        InvalidIdError          → 400
        MalformedRequestError   → 400 with decoder message in `error`
        NotFoundError           → 404
        StorageRead/WriteError  → 500, `error` detail outside production
        RequestValidationError  → 400 (FastAPI query/body parsing)
        Unknown route/method    → 404 "Endpoint not found"
        Exception (fallback)    → 500 "Internal server error"
    """

    @app.exception_handler(PokedexError)
    async def handle_pokedex_error(request: Request, exc: PokedexError):
        rid = request_id_var.get("")
        errors = None
        error = None

        if isinstance(exc, ValidationError):
            errors = exc.errors
        elif isinstance(exc, MalformedRequestError):
            error = exc.detail

        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
            if not app_settings.is_production:
                error = _diagnostic(exc)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        return error_response(exc.message, exc.status_code, errors=errors, error=error)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        messages = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", rid, messages)
        return error_response(ValidationError().message, 400, errors=messages)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response("Endpoint not found", 404)
        return error_response(str(exc.detail), exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client in production."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            "Internal server error",
            500,
            error=None if app_settings.is_production else str(exc),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build from; defaults to the module singleton.
                      Tests pass their own to point at a temporary data file.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Pokemon API",
        description=(
            "CRUD API for a Pokemon catalog stored in a JSON file, with pagination, "
            "input validation and consistent success/error envelopes."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/api-docs.json",
        lifespan=lifespan,
    )

    # ── Store & Service ───────────────────────────────────────────────────
    store = JsonFileStore(app_settings.data_file)
    app.state.settings = app_settings
    app.state.store = store
    app.state.pokemon_service = PokemonService(
        store,
        default_page_size=app_settings.default_page_size,
        max_page_size=app_settings.max_page_size,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    origins = app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, app_settings)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pokemon.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
