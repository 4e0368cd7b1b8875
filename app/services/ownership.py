"""
Ownership Guard

Checks run before every mutation of a creator-owned record.
"""

import uuid

from app.core.exceptions import BadRequestError, ForbiddenError
from app.models.enums import PostType
from app.models.membership_tier import MembershipTier
from app.models.post import Post
from app.models.user import User


def assert_is_creator(user: User, message: str = "Only creators can perform this action") -> None:
    if not user.is_creator:
        raise ForbiddenError(message)


def assert_owns_post(post: Post, acting_user_id: uuid.UUID) -> None:
    if post.creator_id != acting_user_id:
        raise ForbiddenError("Not authorized to modify this post")


def assert_owns_tier(tier: MembershipTier, acting_user_id: uuid.UUID) -> None:
    if tier.creator_id != acting_user_id:
        raise ForbiddenError("Not authorized to modify this membership tier")


def assert_post_type_image(post: Post) -> None:
    if post.type != PostType.IMAGE:
        raise BadRequestError("Post must be of type image")
