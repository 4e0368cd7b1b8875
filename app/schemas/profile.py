"""
Creator Profile Schemas

Pydantic models for profile mutation requests.
"""

import re
import uuid
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

from app.schemas.post import HTTP_URL_RE


Bio = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]

SOCIAL_HOSTS = {
    "instagram": (re.compile(r"instagram\.com", re.IGNORECASE), "Instagram URL must contain instagram.com"),
    "youtube": (re.compile(r"(youtube\.com|youtu\.be)", re.IGNORECASE), "YouTube URL must contain youtube.com or youtu.be"),
    "twitter": (re.compile(r"(twitter\.com|x\.com)", re.IGNORECASE), "Twitter URL must contain twitter.com or x.com"),
}


class ProfileUpdate(BaseModel):
    """General profile update (bio and categories)."""

    bio: Optional[Bio] = None
    categories: Optional[List[Annotated[str, StringConstraints(strip_whitespace=True)]]] = None


class BioUpdate(BaseModel):
    bio: Bio


class SocialLinks(BaseModel):
    """
    Social links. Keys left out are not touched; an empty string or null
    clears the link.
    """

    instagram: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None

    @field_validator("instagram", "youtube", "twitter", "website")
    @classmethod
    def validate_link(cls, v: Optional[str], info) -> str:
        v = (v or "").strip()
        if not v:
            return ""
        if not HTTP_URL_RE.match(v):
            raise ValueError(f"{info.field_name} must be a valid URL")
        host_rule = SOCIAL_HOSTS.get(info.field_name)
        if host_rule is not None and not host_rule[0].search(v):
            raise ValueError(host_rule[1])
        return v


class SocialLinksUpdate(BaseModel):
    socials: SocialLinks


class SupportAmountsUpdate(BaseModel):
    amounts: List[Annotated[float, Field(gt=0)]] = Field(..., max_length=5)


class ThankYouMessageUpdate(BaseModel):
    message: Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class FeaturedPostUpdate(BaseModel):
    """`post_id: null` clears the featured post."""

    post_id: Optional[uuid.UUID] = None
