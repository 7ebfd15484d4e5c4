"""
Campus Revival API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- Token revocation store
- CORS middleware
- API routing
- Exception handlers rendering the JSON error envelope
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_revival.api import api_router
from campus_revival.core.config import settings
from campus_revival.core.database import close_db, init_db
from campus_revival.core.errors import ServiceError
from campus_revival.core.redis import close_redis, init_redis
from campus_revival.core.revocation import build_revocation_store

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Configuration validation
    - Redis connection (optional)
    - Database connection
    - Token revocation store
    """
    setup_logging()
    logger.info(f"Starting Campus Revival API in {settings.python_env} mode...")

    settings.validate_required_for_production()

    # Initialize Redis
    redis = None
    try:
        redis = await init_redis()
        if redis is not None:
            logger.info("[OK] Redis connected")
        else:
            logger.info("Redis not configured, using in-memory stores")
    except (RedisError, OSError) as e:
        logger.error(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    # Initialize Database
    try:
        await init_db()
        logger.info("[OK] Database connected")
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    app.state.revocation_store = build_revocation_store(redis)

    yield  # Application runs here

    logger.info("Shutting down Campus Revival API...")
    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


def _error_body(detail: object) -> dict:
    if isinstance(detail, dict):
        return {"success": False, **detail}
    return {"success": False, "error": str(detail)}


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "error": ..., ...}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"] if part != "body"),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": errors,
            },
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message, "code": exc.error_code},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        content = {
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
        if settings.is_development:
            content["message"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Campus Revival API",
        description="School adoption and prayer journal API",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint - API welcome message."""
        return {
            "message": "Welcome to Campus Revival API",
            "status": "running",
            "environment": settings.python_env,
        }

    return app


app = create_app()
