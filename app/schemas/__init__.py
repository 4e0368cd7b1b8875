"""
Creatorhub Backend - Schemas Module

Pydantic models for request/response validation.
"""

from app.schemas.common import ApiResponse, ErrorResponse, FieldError, Pagination
from app.schemas.user import AuthResult, UserCreate, UserLogin, UserResponse
from app.schemas.token import Token, TokenPayload
from app.schemas.post import PostCreate, PostUpdate
from app.schemas.profile import (
    BioUpdate,
    FeaturedPostUpdate,
    ProfileUpdate,
    SocialLinks,
    SocialLinksUpdate,
    SupportAmountsUpdate,
    ThankYouMessageUpdate,
)
from app.schemas.tier import PublicTierResponse, TierCreate, TierResponse, TierUpdate

__all__ = [
    # Envelope
    "ApiResponse",
    "ErrorResponse",
    "FieldError",
    "Pagination",
    # User
    "AuthResult",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    # Token
    "Token",
    "TokenPayload",
    # Post
    "PostCreate",
    "PostUpdate",
    # Profile
    "BioUpdate",
    "FeaturedPostUpdate",
    "ProfileUpdate",
    "SocialLinks",
    "SocialLinksUpdate",
    "SupportAmountsUpdate",
    "ThankYouMessageUpdate",
    # Tier
    "TierCreate",
    "TierResponse",
    "PublicTierResponse",
    "TierUpdate",
]
