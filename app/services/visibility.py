"""
Visibility Policy

Decides whether a viewer sees a post in full or only as a preview.
Pure functions; callers pass in the viewer's unlocked post ids.
"""

import enum
import uuid
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Optional

from app.models.enums import AccessType
from app.models.post import Post
from app.models.refs import creator_ref


class ViewMode(str, enum.Enum):
    FULL = "full"
    PREVIEW = "preview"


@dataclass(frozen=True)
class PostView:
    mode: ViewMode
    fields: Dict[str, Any] = field(default_factory=dict)


def is_free_open(post: Post) -> bool:
    """Free and not locked: readable by anyone, anonymous included."""
    return post.access_type == AccessType.FREE and not post.is_locked


def is_gated(post: Post) -> bool:
    return not is_free_open(post)


def can_view_full(
    post: Post,
    viewer_id: Optional[uuid.UUID] = None,
    unlocked_post_ids: Collection[uuid.UUID] = (),
) -> bool:
    if is_free_open(post):
        return True
    if viewer_id is None:
        return False
    if post.creator_id == viewer_id:
        return True
    return post.id in unlocked_post_ids


def full_fields(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "creator": creator_ref(post).as_dict(),
        "title": post.title,
        "type": post.type,
        "content": post.content,
        "media_url": post.media_url,
        "video_embed_url": post.video_embed_url,
        "link_url": post.link_url,
        "is_locked": post.is_locked,
        "access_type": post.access_type,
        "membership_tier_required": post.membership_tier_required,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def preview_fields(post: Post) -> Dict[str, Any]:
    # Never carries content or media, whatever the stored lock flag says
    return {
        "id": post.id,
        "title": post.title,
        "created_at": post.created_at,
        "access_type": post.access_type,
        "is_locked": True,
    }


def resolve_post_view(
    post: Post,
    viewer_id: Optional[uuid.UUID] = None,
    unlocked_post_ids: Collection[uuid.UUID] = (),
) -> PostView:
    """
    Resolve the representation of `post` for a viewer.

    Args:
        post: The post to render.
        viewer_id: Authenticated viewer, or None for anonymous requests.
        unlocked_post_ids: Post ids the viewer holds an active unlock for.

    Returns:
        PostView with mode FULL and every field, or mode PREVIEW and the
        restricted field set.
    """
    if can_view_full(post, viewer_id, unlocked_post_ids):
        return PostView(ViewMode.FULL, full_fields(post))
    return PostView(ViewMode.PREVIEW, preview_fields(post))
