"""
Creatorhub Backend - Models Module

This module exports all SQLAlchemy models for the application.
Import Base for Alembic migrations.
"""

from app.core.database import Base

# Enums
from app.models.enums import (
    UserRole,
    PostType,
    AccessType,
    UnlockMethod,
)

# Models
from app.models.user import User
from app.models.membership_tier import MembershipTier
from app.models.post import Post
from app.models.post_unlock import PostUnlock
from app.models.creator_profile import CreatorProfile

__all__ = [
    # Base
    "Base",
    # Enums
    "UserRole",
    "PostType",
    "AccessType",
    "UnlockMethod",
    # Models
    "User",
    "CreatorProfile",
    "Post",
    "PostUnlock",
    "MembershipTier",
]
