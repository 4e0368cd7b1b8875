"""
Creatorhub Backend - FastAPI Application

Main entry point for the application.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from app.api.v1 import router as api_v1_router
from app.core.config import settings
from app.core.database import close_db, init_db
from app.core.exceptions import AppError
from app.core.http_client import close_http_client
from app.schemas.common import ErrorResponse, FieldError


# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Creatorhub Backend (%s)", settings.ENVIRONMENT)
    if settings.is_development:
        # Migrations own the schema outside development
        await init_db()
    if settings.cloudinary_configured:
        logger.info("Media storage: Cloudinary with local fallback")
    else:
        logger.info("Media storage: local directory %s", settings.UPLOADS_DIR)
    yield
    # Shutdown
    logger.info("Shutting down Creatorhub Backend")
    await close_http_client()
    await close_db()


# Create FastAPI application
app = FastAPI(
    title="Creatorhub Backend",
    description="Creator-support platform backend: creator profiles, gated posts and membership tiers.",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Locally stored images
os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")

# Include API routers
app.include_router(api_v1_router, prefix="/api/v1")


# ============== Exception Handlers ==============

def _error_response(
    status_code: int,
    message: str,
    errors: Optional[List[FieldError]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


def _field_errors(exc: RequestValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        # Custom validators raise ValueError; drop pydantic's prefix
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append(FieldError(field=".".join(loc), message=message))
    return errors


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=_field_errors(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Health status and environment info.
    """
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": "0.1.0",
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links.
    """
    return {
        "message": "Welcome to Creatorhub Backend API",
        "docs": "/docs",
        "health": "/health",
    }
