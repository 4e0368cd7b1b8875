"""
Profile Projection

Builds the public and private representations of a creator profile from
records that are already loaded. No I/O here.
"""

from typing import Any, Dict, List, Sequence

from app.models.creator_profile import SOCIAL_NETWORKS, CreatorProfile
from app.models.membership_tier import MembershipTier
from app.models.post import Post
from app.models.user import User
from app.services.visibility import full_fields, is_free_open, preview_fields


PUBLIC_FREE_LIMIT = 10
PUBLIC_LOCKED_LIMIT = 5
PRIVATE_POST_LIMIT = 20

# Order matters: missing_fields is reported in this order
COMPLETION_FIELDS = ("bio", "avatar_url", "banner_url", "socials")


def _filled(value: Any) -> bool:
    return bool(value and str(value).strip())


def _socials(profile: CreatorProfile) -> Dict[str, str]:
    links = profile.social_links or {}
    return {network: links.get(network) or "" for network in SOCIAL_NETWORKS}


def compute_completion(user: User, profile: CreatorProfile) -> Dict[str, Any]:
    """
    Profile completion over four fields: bio, avatar, banner and socials
    (socials count once any single link is set).
    """
    checks = {
        "bio": _filled(profile.bio),
        "avatar_url": _filled(user.avatar_url),
        "banner_url": _filled(profile.banner_url),
        "socials": any(_filled(link) for link in _socials(profile).values()),
    }
    missing = [name for name in COMPLETION_FIELDS if not checks[name]]
    completed = len(COMPLETION_FIELDS) - len(missing)
    return {
        "is_complete": not missing,
        "completion_percentage": round(100 * completed / len(COMPLETION_FIELDS)),
        "missing_fields": missing,
        "total_fields": len(COMPLETION_FIELDS),
        "completed_fields": completed,
    }


def _profile_section(profile: CreatorProfile) -> Dict[str, Any]:
    return {
        "banner_url": profile.banner_url,
        "bio": profile.bio,
        "categories": list(profile.categories or []),
        "socials": _socials(profile),
        "recommended_amounts": profile.recommended_amounts,
        "thank_you_message": profile.thank_you_message,
    }


def _public_tier(tier: MembershipTier) -> Dict[str, Any]:
    return {
        "title": tier.title,
        "description": tier.description,
        "price": tier.price,
        "benefits": list(tier.benefits or []),
    }


def _private_tier(tier: MembershipTier) -> Dict[str, Any]:
    return {
        "id": tier.id,
        **_public_tier(tier),
        "stripe_price_id": tier.stripe_price_id,
    }


def _public_featured(post: Post | None) -> Dict[str, Any] | None:
    if post is None:
        return None
    if not is_free_open(post):
        return preview_fields(post)
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "type": post.type,
        "media_url": post.media_url,
        "created_at": post.created_at,
    }


def _private_locked(post: Post) -> Dict[str, Any]:
    return {
        **preview_fields(post),
        "content": post.content,
        "type": post.type,
        "media_url": post.media_url,
    }


def _partition(posts: Sequence[Post]) -> tuple[List[Post], List[Post]]:
    free = [post for post in posts if is_free_open(post)]
    locked = [post for post in posts if not is_free_open(post)]
    return free, locked


def project_public_profile(
    user: User,
    profile: CreatorProfile,
    posts: Sequence[Post],
) -> Dict[str, Any]:
    """
    Public view of a creator, safe for anonymous visitors.

    Args:
        user: The creator.
        profile: The creator's profile.
        posts: The creator's posts, newest first. Only the newest
            PUBLIC_FREE_LIMIT free-open and PUBLIC_LOCKED_LIMIT gated posts
            are used; gated ones are reduced to previews.

    Returns:
        Dict with user, profile, stats, posts, membership_tiers,
        featured_post and completion_status. Earnings are never included.
    """
    free, locked = _partition(posts)
    return {
        "user": {
            "id": user.id,
            "name": user.name,
            "username": user.email,
            "avatar_url": user.avatar_url,
            "created_at": user.created_at,
        },
        "profile": _profile_section(profile),
        "stats": {"supporters_count": profile.supporters_count},
        "posts": {
            "free": [full_fields(post) for post in free[:PUBLIC_FREE_LIMIT]],
            "locked": [preview_fields(post) for post in locked[:PUBLIC_LOCKED_LIMIT]],
        },
        "membership_tiers": [_public_tier(tier) for tier in profile.membership_tiers],
        "featured_post": _public_featured(profile.featured_post),
        "completion_status": compute_completion(user, profile),
    }


def project_private_profile(
    user: User,
    profile: CreatorProfile,
    posts: Sequence[Post],
    include_stats: bool = True,
) -> Dict[str, Any]:
    """Owner's view: email, tier ids, full locked posts, earnings on request."""
    free, locked = _partition(posts[:PRIVATE_POST_LIMIT])
    stats: Dict[str, Any] = {"supporters_count": profile.supporters_count}
    if include_stats:
        stats["earnings_total"] = profile.earnings_total
    featured = profile.featured_post
    return {
        "user": {
            "id": user.id,
            "name": user.name,
            "username": user.email,
            "email": user.email,
            "avatar_url": user.avatar_url,
            "created_at": user.created_at,
        },
        "profile": _profile_section(profile),
        "stats": stats,
        "posts": {
            "free": [full_fields(post) for post in free],
            "locked": [_private_locked(post) for post in locked],
        },
        "membership_tiers": [_private_tier(tier) for tier in profile.membership_tiers],
        "featured_post": full_fields(featured) if featured is not None else None,
        "completion_status": compute_completion(user, profile),
    }
