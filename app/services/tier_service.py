"""
Membership Tier Service

CRUD for creator-defined membership tiers.
"""

import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.membership_tier import MembershipTier
from app.models.user import User
from app.schemas.tier import TierCreate, TierUpdate
from app.services.ownership import assert_is_creator, assert_owns_tier


async def get_tier(db: AsyncSession, tier_id: uuid.UUID) -> MembershipTier:
    result = await db.execute(select(MembershipTier).where(MembershipTier.id == tier_id))
    tier = result.scalar_one_or_none()
    if tier is None:
        raise NotFoundError("Membership tier not found")
    return tier


async def list_creator_tiers(db: AsyncSession, creator_id: uuid.UUID) -> List[MembershipTier]:
    result = await db.execute(
        select(MembershipTier)
        .where(MembershipTier.creator_id == creator_id)
        .order_by(MembershipTier.created_at)
    )
    return list(result.scalars().all())


async def create_tier(db: AsyncSession, user: User, data: TierCreate) -> MembershipTier:
    assert_is_creator(user, "Only creators can create membership tiers")
    tier = MembershipTier(creator_id=user.id, **data.model_dump())
    db.add(tier)
    await db.commit()
    await db.refresh(tier)
    return tier


async def update_tier(
    db: AsyncSession,
    tier_id: uuid.UUID,
    user: User,
    data: TierUpdate,
) -> MembershipTier:
    tier = await get_tier(db, tier_id)
    assert_owns_tier(tier, user.id)

    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(tier, key, value)
    await db.commit()
    await db.refresh(tier)
    return tier


async def delete_tier(db: AsyncSession, tier_id: uuid.UUID, user: User) -> None:
    tier = await get_tier(db, tier_id)
    assert_owns_tier(tier, user.id)
    await db.delete(tier)
    await db.commit()
