"""
Membership Tier Model

Creator-defined subscription level.
"""

import uuid
from typing import List

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.mixins import TimestampMixin


class MembershipTier(TimestampMixin, Base):
    """
    Membership tier.

    Attributes:
        creator_id: Owning creator. This is the only ownership pointer; a
            creator profile lists the tiers carrying its user_id.
        price: Monthly price, strictly positive.
        benefits: Ordered list of perks.
        stripe_price_id: External billing reference (billing is stubbed).
    """

    __tablename__ = "membership_tiers"

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_membership_tiers_price_positive"),
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
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
    )
    benefits: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    stripe_price_id: Mapped[str] = mapped_column(
        String(255),
        default="",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<MembershipTier(id={self.id}, title={self.title}, price={self.price})>"
