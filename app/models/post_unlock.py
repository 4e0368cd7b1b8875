"""
Post Unlock Model

Grants a specific supporter access to a specific gated post.
"""

import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.enums import UnlockMethod
from app.models.mixins import TimestampMixin


class PostUnlock(TimestampMixin, Base):
    """
    Junction record between a supporter and a post.

    Unique constraint ensures at most one unlock per (supporter, post) pair.
    creator_id is denormalized from the post for per-creator queries.
    """

    __tablename__ = "post_unlocks"

    __table_args__ = (
        UniqueConstraint("supporter_id", "post_id", name="uq_supporter_post"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    supporter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    has_access: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    unlocked_by: Mapped[UnlockMethod] = mapped_column(
        Enum(
            UnlockMethod,
            name="unlock_method",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<PostUnlock(supporter_id={self.supporter_id}, post_id={self.post_id})>"
