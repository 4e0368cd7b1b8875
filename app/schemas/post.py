"""
Post Schemas

Pydantic models for post create/update validation.
"""

import re
import uuid
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints, ValidationInfo, field_validator

from app.models.enums import AccessType, PostType


HTTP_URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)
VIDEO_HOST_RE = re.compile(r"(youtube\.com|youtu\.be|vimeo\.com)", re.IGNORECASE)

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)]


def check_http_url(value: Optional[str], label: str) -> Optional[str]:
    """Empty strings clear the field; anything else must be an http(s) URL."""
    if value is None:
        return value
    value = value.strip()
    if value and not HTTP_URL_RE.match(value):
        raise ValueError(f"{label} must be a valid URL")
    return value


def check_video_embed_url(value: Optional[str]) -> Optional[str]:
    value = check_http_url(value, "Video embed URL")
    if value and not VIDEO_HOST_RE.search(value):
        raise ValueError("Video embed URL must be from YouTube or Vimeo")
    return value


class PostCreate(BaseModel):
    """Schema for creating a post."""

    title: Title
    type: PostType
    content: Content
    media_url: str = ""
    video_embed_url: str = Field(default="", validate_default=True)
    link_url: str = ""
    is_locked: bool = False
    access_type: AccessType = AccessType.FREE
    membership_tier_required: Optional[uuid.UUID] = Field(default=None, validate_default=True)

    @field_validator("media_url")
    @classmethod
    def validate_media_url(cls, v: str) -> str:
        return check_http_url(v, "Media URL")

    @field_validator("link_url")
    @classmethod
    def validate_link_url(cls, v: str) -> str:
        return check_http_url(v, "Link URL")

    @field_validator("video_embed_url")
    @classmethod
    def validate_video_embed_url(cls, v: str, info: ValidationInfo) -> str:
        v = check_video_embed_url(v)
        if info.data.get("type") == PostType.VIDEO_EMBED and not v:
            raise ValueError("Video embed URL is required for video posts")
        return v

    @field_validator("membership_tier_required")
    @classmethod
    def validate_tier(cls, v: Optional[uuid.UUID], info: ValidationInfo) -> Optional[uuid.UUID]:
        if info.data.get("access_type") == AccessType.MEMBERSHIP_ONLY and v is None:
            raise ValueError("Membership tier is required for membership-only posts")
        return v


class PostUpdate(BaseModel):
    """Schema for updating a post. Only provided fields are applied."""

    title: Optional[Title] = None
    type: Optional[PostType] = None
    content: Optional[Content] = None
    media_url: Optional[str] = None
    video_embed_url: Optional[str] = None
    link_url: Optional[str] = None
    is_locked: Optional[bool] = None
    access_type: Optional[AccessType] = None
    membership_tier_required: Optional[uuid.UUID] = None

    @field_validator("media_url")
    @classmethod
    def validate_media_url(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v, "Media URL")

    @field_validator("link_url")
    @classmethod
    def validate_link_url(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v, "Link URL")

    @field_validator("video_embed_url")
    @classmethod
    def validate_video_embed_url(cls, v: Optional[str]) -> Optional[str]:
        return check_video_embed_url(v)
