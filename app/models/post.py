"""
Post Model

Content unit owned by exactly one creator.
"""

import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import AccessType, PostType
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.membership_tier import MembershipTier
    from app.models.user import User


class Post(TimestampMixin, Base):
    """
    Post model.

    `type` decides which of media_url / video_embed_url / link_url is
    meaningful. `membership_tier_required` only matters for
    membership-only posts.
    """

    __tablename__ = "posts"

    __table_args__ = (
        Index("ix_posts_creator_created", "creator_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    type: Mapped[PostType] = mapped_column(
        Enum(
            PostType,
            name="post_type",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=PostType.TEXT,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    media_url: Mapped[str] = mapped_column(
        String(1024),
        default="",
        nullable=False,
    )
    video_embed_url: Mapped[str] = mapped_column(
        String(1024),
        default="",
        nullable=False,
    )
    link_url: Mapped[str] = mapped_column(
        String(1024),
        default="",
        nullable=False,
    )
    is_locked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
    access_type: Mapped[AccessType] = mapped_column(
        Enum(
            AccessType,
            name="access_type",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=AccessType.FREE,
        nullable=False,
        index=True,
    )
    membership_tier_required: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("membership_tiers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    creator: Mapped["User"] = relationship(
        "User",
        foreign_keys=[creator_id],
        lazy="selectin",
    )
    membership_tier: Mapped[Optional["MembershipTier"]] = relationship(
        "MembershipTier",
        foreign_keys=[membership_tier_required],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title[:30]}, access={self.access_type})>"
