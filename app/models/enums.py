"""
Database Enums

Python Enums stored as their string values.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    CREATOR = "creator"
    SUPPORTER = "supporter"


class PostType(str, enum.Enum):
    """Post type; decides which of media/video/link URL is meaningful."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO_EMBED = "videoEmbed"
    LINK = "link"


class AccessType(str, enum.Enum):
    """Who may read a post's content."""
    FREE = "free"
    SUPPORTER_ONLY = "supporter-only"
    MEMBERSHIP_ONLY = "membership-only"


class UnlockMethod(str, enum.Enum):
    """How a supporter gained access to a gated post."""
    PAYMENT = "payment"
    MEMBERSHIP = "membership"
