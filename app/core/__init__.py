"""
Creatorhub Backend - Core Module

This module contains configuration, database setup, security utilities and
the domain exception hierarchy.
"""

from app.core.config import get_settings, settings
from app.core.database import Base, get_db, get_engine
from app.core.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
)

__all__ = [
    "settings",
    "get_settings",
    "Base",
    "get_db",
    "get_engine",
    "AppError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UpstreamError",
]
