"""
Unlock Service

Per-supporter access grants for gated posts.
"""

import logging
import uuid
from typing import Iterable, Set

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError
from app.models.enums import UnlockMethod
from app.models.post import Post
from app.models.post_unlock import PostUnlock


logger = logging.getLogger(__name__)


async def grant_unlock(
    db: AsyncSession,
    supporter_id: uuid.UUID,
    post: Post,
    unlocked_by: UnlockMethod,
) -> PostUnlock:
    """
    Record that a supporter may read a post.

    Raises:
        ConflictError: The supporter already holds an unlock for this post.
    """
    existing = await db.execute(
        select(PostUnlock.id).where(
            PostUnlock.supporter_id == supporter_id,
            PostUnlock.post_id == post.id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Post already unlocked")

    unlock = PostUnlock(
        supporter_id=supporter_id,
        post_id=post.id,
        creator_id=post.creator_id,
        has_access=True,
        unlocked_by=unlocked_by,
    )
    db.add(unlock)
    try:
        await db.flush()
    except IntegrityError:
        # Concurrent grant won the unique constraint
        await db.rollback()
        raise ConflictError("Post already unlocked")

    logger.info("Post %s unlocked for supporter %s via %s", post.id, supporter_id, unlocked_by.value)
    return unlock


async def get_unlocked_post_ids(
    db: AsyncSession,
    viewer_id: uuid.UUID | None,
    post_ids: Iterable[uuid.UUID],
) -> Set[uuid.UUID]:
    """Subset of `post_ids` the viewer holds an active unlock for."""
    post_ids = list(post_ids)
    if viewer_id is None or not post_ids:
        return set()
    result = await db.execute(
        select(PostUnlock.post_id).where(
            PostUnlock.supporter_id == viewer_id,
            PostUnlock.post_id.in_(post_ids),
            PostUnlock.has_access.is_(True),
        )
    )
    return set(result.scalars().all())
