"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory
   - create_app(settings, store) returns a configured app
   - The storage handle is injected or opened in the lifespan, then kept
     on app.state; nothing is held in module globals

2. Lifespan Events
   - startup: open the store (connect, create tables)
   - shutdown: close the store (dispose the engine)

3. Exception Handlers
   - Translate storage and request errors into the response envelope

4. Entry Point
   - run(): load settings, exit with status 1 on bad configuration,
     serve with uvicorn
"""

import logging
import sys
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore import __version__
from bookstore.config import Settings, get_settings
from bookstore.routers import books_router
from bookstore.schemas import failure
from bookstore.storage import BookStore, Conflict, NotFound, StorageError, open_store

logger = logging.getLogger(__name__)


# =============================================================================
# Logging Configuration
# =============================================================================
def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def error_response(code: int, *errors: str) -> JSONResponse:
    """Error envelope as a JSON response."""
    return JSONResponse(
        status_code=code,
        content=failure(code, list(errors)).model_dump(mode="json"),
    )


def describe_validation_errors(exc: RequestValidationError) -> list[str]:
    """
    Flatten request validation errors to "location: message" strings.

    Example: "body.title: Field required", "path.book_id: Input should be
    a valid integer, unable to parse string as an integer".
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return messages or ["malformed request"]


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    settings: Settings | None = None,
    store: BookStore | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to get_settings()
        store: Storage handle to use. When omitted, the lifespan opens
            the one selected by settings and closes it on shutdown.

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ----- STARTUP -----
        logger.info(f"Starting {settings.app_name}...")
        owns_store = store is None
        if owns_store:
            try:
                app.state.store = open_store(settings)
            except Exception:
                logger.critical("Could not open storage, aborting startup", exc_info=True)
                raise
        logger.info(f"Storage backend: {app.state.store.backend}")

        yield

        # ----- SHUTDOWN -----
        logger.info(f"Shutting down {settings.app_name}...")
        if owns_store:
            app.state.store.close()

    app = FastAPI(
        title=settings.app_name,
        description="A REST API for managing a collection of books.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with its status and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed JSON, wrong body shape or a non-integer path id."""
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            *describe_validation_errors(exc),
        )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(Conflict)
    async def conflict_handler(request: Request, exc: Conflict) -> JSONResponse:
        return error_response(status.HTTP_409_CONFLICT, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request,
        exc: StorageError,
    ) -> JSONResponse:
        """Any other storage failure; details stay in the log unless debugging."""
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        if settings.debug and exc.__cause__ is not None:
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                exc.message,
                str(exc.__cause__),
            )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Unknown routes and unsupported methods."""
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred.",
        )

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router, prefix=settings.api_prefix)

    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and which storage it uses.",
    )
    def health_check(request: Request) -> dict:
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "storage": request.app.state.store.backend,
        }

    return app


# =============================================================================
# Entry Point
# =============================================================================
def run() -> None:
    """
    Start the server on APP_ADDRESS.

    Invalid or missing configuration is fatal: it is logged and the
    process exits with status 1.
    """
    try:
        settings = get_settings()
    except ValidationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.critical(f"Invalid configuration:\n{exc}")
        sys.exit(1)

    import uvicorn

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
