"""
Creator Profile Service

Lazy creation of creator profiles plus every profile mutation. Each
mutation returns the owner's (private) projection of the updated profile.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.creator_profile import CreatorProfile, empty_social_links
from app.models.enums import AccessType, UserRole
from app.models.post import Post
from app.models.user import User
from app.schemas.profile import ProfileUpdate, SocialLinks
from app.services.media_service import ImageUpload, MediaStore, discard_image, store_image
from app.services.ownership import assert_is_creator, assert_owns_post
from app.services.profile_projection import (
    PRIVATE_POST_LIMIT,
    PUBLIC_FREE_LIMIT,
    PUBLIC_LOCKED_LIMIT,
    project_private_profile,
    project_public_profile,
)


logger = logging.getLogger(__name__)

NOT_A_CREATOR = "User is not a creator"


async def find_profile(db: AsyncSession, user_id: uuid.UUID) -> Optional[CreatorProfile]:
    # populate_existing reloads relationships changed earlier in the session
    result = await db.execute(
        select(CreatorProfile)
        .where(CreatorProfile.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_or_create_profile(db: AsyncSession, user: User) -> CreatorProfile:
    """
    Return the creator's profile, inserting a default one if none exists.

    Two concurrent first requests may both try to insert; the unique
    user_id constraint lets one win and the loser re-reads the winner's row.
    """
    user_id = user.id
    profile = await find_profile(db, user_id)
    if profile is not None:
        return profile

    db.add(CreatorProfile(user_id=user_id, social_links=empty_social_links()))
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        # rollback expired the user; reload it before anything reads it
        await db.refresh(user)
        logger.info("Creator profile for user %s was created concurrently, re-reading", user_id)
        profile = await find_profile(db, user_id)
        if profile is None:
            raise
        return profile

    logger.info("Created default creator profile for user %s", user_id)
    return await find_profile(db, user_id)


async def find_creator(db: AsyncSession, identifier: str) -> User:
    """Look up a creator by user id or (case-insensitive) email."""
    query = select(User).where(User.role == UserRole.CREATOR)
    try:
        query = query.where(User.id == uuid.UUID(identifier))
    except ValueError:
        query = query.where(func.lower(User.email) == identifier.strip().lower())

    result = await db.execute(query)
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("Creator profile not found")
    return user


async def _newest_posts(db: AsyncSession, creator_id: uuid.UUID, *criteria, limit: int) -> List[Post]:
    result = await db.execute(
        select(Post)
        .where(Post.creator_id == creator_id, *criteria)
        .order_by(Post.created_at.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_public_profile(db: AsyncSession, identifier: str) -> Dict[str, Any]:
    """
    Public creator page.

    Raises:
        NotFoundError: No creator with that id or email.
    """
    user = await find_creator(db, identifier)
    profile = await get_or_create_profile(db, user)

    free = await _newest_posts(
        db,
        user.id,
        Post.access_type == AccessType.FREE,
        Post.is_locked.is_(False),
        limit=PUBLIC_FREE_LIMIT,
    )
    gated = await _newest_posts(
        db,
        user.id,
        or_(Post.access_type != AccessType.FREE, Post.is_locked.is_(True)),
        limit=PUBLIC_LOCKED_LIMIT,
    )
    posts = sorted(free + gated, key=lambda post: post.created_at, reverse=True)
    return project_public_profile(user, profile, posts)


async def get_private_profile(
    db: AsyncSession,
    user: User,
    include_stats: bool = True,
) -> Dict[str, Any]:
    """Owner's view of their own profile. Supporters are rejected before anything is created."""
    assert_is_creator(user, NOT_A_CREATOR)
    profile = await get_or_create_profile(db, user)
    posts = await _newest_posts(db, user.id, limit=PRIVATE_POST_LIMIT)
    return project_private_profile(user, profile, posts, include_stats=include_stats)


async def _editable_profile(db: AsyncSession, user: User) -> CreatorProfile:
    assert_is_creator(user, NOT_A_CREATOR)
    return await get_or_create_profile(db, user)


async def _save(db: AsyncSession, user: User) -> Dict[str, Any]:
    await db.commit()
    return await get_private_profile(db, user)


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> Dict[str, Any]:
    profile = await _editable_profile(db, user)
    if data.bio is not None:
        profile.bio = data.bio
    if data.categories is not None:
        profile.categories = [category for category in data.categories if category]
    return await _save(db, user)


async def update_bio(db: AsyncSession, user: User, bio: str) -> Dict[str, Any]:
    profile = await _editable_profile(db, user)
    profile.bio = bio.strip()
    return await _save(db, user)


async def update_social_links(db: AsyncSession, user: User, socials: SocialLinks) -> Dict[str, Any]:
    """Only the keys present in the request are touched."""
    profile = await _editable_profile(db, user)
    links = {**empty_social_links(), **(profile.social_links or {})}
    for network, url in socials.model_dump(exclude_unset=True).items():
        links[network] = (url or "").strip()
    # new dict so the JSON column registers the change
    profile.social_links = links
    return await _save(db, user)


async def set_support_amounts(db: AsyncSession, user: User, amounts: List[float]) -> Dict[str, Any]:
    profile = await _editable_profile(db, user)
    profile.recommended_amounts = list(amounts)
    return await _save(db, user)


async def set_thank_you_message(db: AsyncSession, user: User, message: str) -> Dict[str, Any]:
    profile = await _editable_profile(db, user)
    profile.thank_you_message = message.strip()
    return await _save(db, user)


async def set_featured_post(
    db: AsyncSession,
    user: User,
    post_id: Optional[uuid.UUID],
) -> Dict[str, Any]:
    """
    Highlight one of the creator's own posts, or clear the highlight.

    Raises:
        NotFoundError: The post does not exist.
        ForbiddenError: The post belongs to someone else.
    """
    profile = await _editable_profile(db, user)
    if post_id is None:
        profile.featured_post_id = None
    else:
        result = await db.execute(select(Post).where(Post.id == post_id))
        post = result.scalar_one_or_none()
        if post is None:
            raise NotFoundError("Post not found")
        assert_owns_post(post, user.id)
        profile.featured_post_id = post.id
    return await _save(db, user)


async def upload_avatar(
    db: AsyncSession,
    user: User,
    image: ImageUpload,
    store: MediaStore,
) -> Dict[str, Any]:
    await _editable_profile(db, user)
    url = await store_image(store, image, "profiles", f"profile_{user.id}")
    previous = user.avatar_url
    user.avatar_url = url
    result = await _save(db, user)
    if previous and previous != url:
        await discard_image(store, previous)
    return result


async def upload_banner(
    db: AsyncSession,
    user: User,
    image: ImageUpload,
    store: MediaStore,
) -> Dict[str, Any]:
    profile = await _editable_profile(db, user)
    url = await store_image(store, image, "banners", f"banner_{user.id}")
    previous = profile.banner_url
    profile.banner_url = url
    result = await _save(db, user)
    if previous and previous != url:
        await discard_image(store, previous)
    return result
