"""
FastAPI application entry point for the Listo shopping-list API.

``create_app`` builds the app around an explicitly constructed store. When
no store is passed in, one is built from settings on startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from listo.config import settings
from listo.core.exceptions import ListoError
from listo.core.logging_config import setup_logging
from listo.core.rate_limit import limiter
from listo.routers import auth, items, lists, participants, users
from listo.storage import Storage, build_storage

setup_logging(settings.LOG_LEVEL, settings.ENABLE_FILE_LOGGING, settings.LOG_DIR)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    if app.state.storage is None:
        logger.info("Initializing storage...")
        app.state.storage = build_storage(settings)
        logger.info("Storage initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    app.state.storage.close()


def _validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Every error response carries ``message``; validation adds ``errors``."""

    @app.exception_handler(ListoError)
    async def listo_error_handler(request: Request, exc: ListoError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid data", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"message": "Rate limit exceeded. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """Build the API around ``storage`` (or a settings-configured store)."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Shared shopping lists",
        version=settings.API_VERSION,
        lifespan=lifespan,
    )
    app.state.storage = storage
    app.state.limiter = limiter

    register_exception_handlers(app)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Register routers
    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(lists.router, prefix=f"{prefix}/lists", tags=["lists"])
    app.include_router(items.router, prefix=f"{prefix}/lists", tags=["items"])
    app.include_router(participants.router, prefix=f"{prefix}/lists", tags=["participants"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])

    @app.get("/")
    async def root():
        """Root endpoint for health check."""
        return {"message": settings.PROJECT_NAME, "status": "running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "listo.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
