"""
Post Service

Business logic for creator posts: CRUD, listing with per-viewer gating,
and image attachment.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.creator_profile import CreatorProfile
from app.models.enums import AccessType
from app.models.membership_tier import MembershipTier
from app.models.post import Post
from app.models.post_unlock import PostUnlock
from app.models.user import User
from app.schemas.common import Pagination
from app.schemas.post import PostCreate, PostUpdate
from app.services.media_service import ImageUpload, MediaStore, discard_image, store_image
from app.services.ownership import assert_is_creator, assert_owns_post, assert_post_type_image
from app.services.unlock_service import get_unlocked_post_ids
from app.services.visibility import resolve_post_view


logger = logging.getLogger(__name__)

# Fields a post update may set to null
NULLABLE_FIELDS = {"membership_tier_required"}


async def get_post(db: AsyncSession, post_id: uuid.UUID) -> Post:
    result = await db.execute(
        select(Post)
        .where(Post.id == post_id)
        .execution_options(populate_existing=True)
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise NotFoundError("Post not found")
    return post


async def _check_tier(db: AsyncSession, tier_id: Optional[uuid.UUID], creator_id: uuid.UUID) -> None:
    """A required tier must exist and belong to the post's creator."""
    if tier_id is None:
        return
    result = await db.execute(
        select(MembershipTier.id).where(
            MembershipTier.id == tier_id,
            MembershipTier.creator_id == creator_id,
        )
    )
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Membership tier not found")


async def _views_for(db: AsyncSession, posts: List[Post], viewer: Optional[User]) -> List[Dict[str, Any]]:
    viewer_id = viewer.id if viewer is not None else None
    unlocked = await get_unlocked_post_ids(db, viewer_id, [post.id for post in posts])
    return [resolve_post_view(post, viewer_id, unlocked).fields for post in posts]


async def create_post(db: AsyncSession, user: User, data: PostCreate) -> Dict[str, Any]:
    """
    Create a post owned by `user`.

    Raises:
        ForbiddenError: The user is not a creator.
        NotFoundError: The required membership tier is not one of theirs.
    """
    assert_is_creator(user, "Only creators can create posts")
    await _check_tier(db, data.membership_tier_required, user.id)

    post = Post(creator_id=user.id, **data.model_dump())
    db.add(post)
    await db.commit()

    post = await get_post(db, post.id)
    logger.info("Creator %s created post %s (%s)", user.id, post.id, post.access_type.value)
    return resolve_post_view(post, user.id).fields


async def list_posts(
    db: AsyncSession,
    viewer: Optional[User],
    page: int = 1,
    limit: int = 10,
    access_type: Optional[AccessType] = None,
    is_locked: Optional[bool] = None,
    creator_id: Optional[uuid.UUID] = None,
) -> Tuple[List[Dict[str, Any]], Pagination]:
    """
    Newest-first page of posts, each resolved for the viewer.

    Returns:
        Tuple of (post views, pagination metadata).
    """
    filters = []
    if access_type is not None:
        filters.append(Post.access_type == access_type)
    if is_locked is not None:
        filters.append(Post.is_locked.is_(is_locked))
    if creator_id is not None:
        filters.append(Post.creator_id == creator_id)

    count_result = await db.execute(select(func.count()).select_from(Post).where(*filters))
    total = count_result.scalar_one()

    result = await db.execute(
        select(Post)
        .where(*filters)
        .order_by(Post.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    posts = list(result.scalars().all())

    views = await _views_for(db, posts, viewer)
    return views, Pagination.build(page, limit, total)


async def get_post_view(db: AsyncSession, post_id: uuid.UUID, viewer: Optional[User]) -> Dict[str, Any]:
    post = await get_post(db, post_id)
    return (await _views_for(db, [post], viewer))[0]


async def list_creator_posts(
    db: AsyncSession,
    creator_id: uuid.UUID,
    viewer: Optional[User],
    page: int = 1,
    limit: int = 10,
    access_type: Optional[AccessType] = None,
    is_locked: Optional[bool] = None,
) -> Tuple[List[Dict[str, Any]], Pagination]:
    result = await db.execute(select(User.id).where(User.id == creator_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Creator not found")
    return await list_posts(
        db,
        viewer,
        page=page,
        limit=limit,
        access_type=access_type,
        is_locked=is_locked,
        creator_id=creator_id,
    )


async def update_post(
    db: AsyncSession,
    post_id: uuid.UUID,
    user: User,
    data: PostUpdate,
) -> Dict[str, Any]:
    """Apply the provided fields. Nothing is written unless the user owns the post."""
    post = await get_post(db, post_id)
    assert_owns_post(post, user.id)

    changes = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    if "membership_tier_required" in changes:
        await _check_tier(db, changes["membership_tier_required"], user.id)

    for key, value in changes.items():
        setattr(post, key, value)
    await db.commit()

    post = await get_post(db, post_id)
    return resolve_post_view(post, user.id).fields


async def delete_post(
    db: AsyncSession,
    post_id: uuid.UUID,
    user: User,
    store: MediaStore,
) -> None:
    """
    Delete a post. A locally stored image is removed on a best-effort
    basis; failing to remove it never blocks the deletion.
    """
    post = await get_post(db, post_id)
    assert_owns_post(post, user.id)
    media_url = post.media_url

    await db.execute(
        update(CreatorProfile)
        .where(CreatorProfile.featured_post_id == post.id)
        .values(featured_post_id=None)
    )
    await db.execute(delete(PostUnlock).where(PostUnlock.post_id == post.id))
    await db.delete(post)
    await db.commit()
    logger.info("Creator %s deleted post %s", user.id, post_id)

    if media_url:
        await discard_image(store, media_url)


async def upload_post_image(
    db: AsyncSession,
    post_id: uuid.UUID,
    user: User,
    image: ImageUpload,
    store: MediaStore,
) -> Dict[str, Any]:
    post = await get_post(db, post_id)
    assert_owns_post(post, user.id)
    assert_post_type_image(post)

    url = await store_image(store, image, "posts", f"post_{post.id}")
    previous = post.media_url
    post.media_url = url
    await db.commit()

    if previous and previous != url:
        await discard_image(store, previous)

    post = await get_post(db, post_id)
    return resolve_post_view(post, user.id).fields
