"""
User Schemas

Pydantic models for user request/response validation.
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from app.models.enums import UserRole


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)] = Field(
        ..., description="User's display name"
    )
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    role: UserRole = Field(default=UserRole.SUPPORTER, description="User role")


class UserResponse(BaseModel):
    """Schema for user response (excludes password hash)."""

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    avatar_url: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")


class AuthResult(BaseModel):
    """User plus a freshly issued access token."""

    user: UserResponse
    token: str
