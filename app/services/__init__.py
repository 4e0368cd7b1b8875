"""
Creatorhub Backend - Services Module

Business logic layer.
"""

from app.services import media_service
from app.services import post_service
from app.services import profile_service
from app.services import tier_service
from app.services import unlock_service

__all__ = [
    "media_service",
    "post_service",
    "profile_service",
    "tier_service",
    "unlock_service",
]
