"""
Creator Profile Model

One-to-one extension of a creator user with banner, bio, social links and
stats.
"""

import uuid
from typing import TYPE_CHECKING, Dict, List, Optional

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.membership_tier import MembershipTier
    from app.models.post import Post


SOCIAL_NETWORKS = ("instagram", "youtube", "twitter", "website")


def empty_social_links() -> Dict[str, str]:
    return {network: "" for network in SOCIAL_NETWORKS}


class CreatorProfile(TimestampMixin, Base):
    """
    Creator profile model for users with the creator role.

    At most one row per user (unique user_id). Rows are created lazily the
    first time a profile-touching operation runs for a creator.

    Attributes:
        user_id: Owning user.
        banner_url: Banner image URL, empty string when unset.
        bio: Biography, at most 1000 characters.
        categories: Ordered category tags (duplicates allowed).
        social_links: {instagram, youtube, twitter, website}.
        earnings_total: Lifetime earnings, never negative.
        supporters_count: Number of supporters, never negative.
        featured_post_id: Optional highlighted post.
        recommended_amounts: Suggested support amounts (up to 5).
        thank_you_message: Message shown to supporters.
    """

    __tablename__ = "creator_profiles"

    __table_args__ = (
        CheckConstraint("earnings_total >= 0", name="ck_creator_profiles_earnings"),
        CheckConstraint("supporters_count >= 0", name="ck_creator_profiles_supporters"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    banner_url: Mapped[str] = mapped_column(
        String(1024),
        default="",
        nullable=False,
    )
    bio: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    categories: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    social_links: Mapped[Dict[str, str]] = mapped_column(
        JSON,
        default=empty_social_links,
        nullable=False,
    )
    earnings_total: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        default=0,
        nullable=False,
    )
    supporters_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    featured_post_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
    )
    recommended_amounts: Mapped[Optional[List[float]]] = mapped_column(
        JSON,
        nullable=True,
    )
    thank_you_message: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    # Relationships
    featured_post: Mapped[Optional["Post"]] = relationship(
        "Post",
        foreign_keys=[featured_post_id],
        lazy="selectin",
    )
    membership_tiers: Mapped[List["MembershipTier"]] = relationship(
        "MembershipTier",
        primaryjoin="foreign(MembershipTier.creator_id) == CreatorProfile.user_id",
        order_by="MembershipTier.created_at",
        viewonly=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<CreatorProfile(id={self.id}, user_id={self.user_id})>"
