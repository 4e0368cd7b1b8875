"""
Visibility Policy Unit Tests

Tests for full/preview resolution of posts per viewer.
"""

import uuid
from datetime import datetime, timezone

import pytest

from app.models import AccessType, Post, PostType, User, UserRole
from app.models.refs import Resolved, Unresolved, creator_ref
from app.services.visibility import (
    ViewMode,
    can_view_full,
    is_free_open,
    is_gated,
    resolve_post_view,
)


CONTENT_FIELDS = ("content", "media_url", "video_embed_url", "link_url")

ALL_COMBINATIONS = [
    (access_type, is_locked)
    for access_type in AccessType
    for is_locked in (False, True)
]


def build_post(access_type=AccessType.FREE, is_locked=False, creator_id=None, creator=None) -> Post:
    now = datetime.now(timezone.utc)
    post = Post(
        id=uuid.uuid4(),
        creator_id=creator_id or uuid.uuid4(),
        title="Hi",
        type=PostType.IMAGE,
        content="hello",
        media_url="https://media.test/a.jpg",
        video_embed_url="",
        link_url="",
        access_type=access_type,
        is_locked=is_locked,
        created_at=now,
        updated_at=now,
    )
    if creator is not None:
        post.creator = creator
    return post


class TestPredicates:
    """Tests for the free/gated predicates."""

    def test_free_unlocked_is_open(self):
        post = build_post(AccessType.FREE, is_locked=False)
        assert is_free_open(post)
        assert not is_gated(post)

    def test_free_but_locked_is_gated(self):
        """A lock flag gates a post even when its access type is free."""
        post = build_post(AccessType.FREE, is_locked=True)
        assert not is_free_open(post)
        assert is_gated(post)

    @pytest.mark.parametrize("access_type", [AccessType.SUPPORTER_ONLY, AccessType.MEMBERSHIP_ONLY])
    def test_paid_access_is_gated(self, access_type):
        assert is_gated(build_post(access_type, is_locked=False))


class TestResolvePostView:
    """Tests for resolve_post_view."""

    @pytest.mark.parametrize("viewer_id", [None, uuid.uuid4()])
    def test_free_post_is_full_for_anyone(self, viewer_id):
        post = build_post()

        view = resolve_post_view(post, viewer_id)

        assert view.mode == ViewMode.FULL
        assert view.fields["content"] == "hello"
        assert view.fields["media_url"] == "https://media.test/a.jpg"
        assert view.fields["type"] == PostType.IMAGE

    @pytest.mark.parametrize(
        "access_type,is_locked",
        [combo for combo in ALL_COMBINATIONS if combo != (AccessType.FREE, False)],
    )
    @pytest.mark.parametrize("viewer_id", [None, uuid.uuid4()])
    def test_gated_post_hides_content_from_strangers(self, access_type, is_locked, viewer_id):
        post = build_post(access_type, is_locked)

        view = resolve_post_view(post, viewer_id)

        assert view.mode == ViewMode.PREVIEW
        for field in CONTENT_FIELDS:
            assert field not in view.fields
        assert view.fields == {
            "id": post.id,
            "title": "Hi",
            "created_at": post.created_at,
            "access_type": access_type,
            "is_locked": True,
        }

    @pytest.mark.parametrize("access_type,is_locked", ALL_COMBINATIONS)
    def test_owner_always_sees_full(self, access_type, is_locked):
        owner_id = uuid.uuid4()
        post = build_post(access_type, is_locked, creator_id=owner_id)

        view = resolve_post_view(post, owner_id)

        assert view.mode == ViewMode.FULL
        assert view.fields["content"] == "hello"

    def test_unlocked_post_is_full(self):
        post = build_post(AccessType.SUPPORTER_ONLY)
        supporter_id = uuid.uuid4()

        assert can_view_full(post, supporter_id, {post.id})
        assert resolve_post_view(post, supporter_id, {post.id}).mode == ViewMode.FULL

    def test_unlock_for_another_post_does_not_help(self):
        post = build_post(AccessType.SUPPORTER_ONLY)

        view = resolve_post_view(post, uuid.uuid4(), {uuid.uuid4()})

        assert view.mode == ViewMode.PREVIEW

    def test_anonymous_viewer_ignores_unlock_set(self):
        post = build_post(AccessType.SUPPORTER_ONLY)
        assert not can_view_full(post, None, {post.id})


class TestCreatorRef:
    """Tests for the Unresolved/Resolved creator reference."""

    def test_unloaded_creator_is_unresolved(self):
        creator_id = uuid.uuid4()
        post = build_post(creator_id=creator_id)

        ref = creator_ref(post)

        assert isinstance(ref, Unresolved)
        assert ref.as_dict() == {"id": creator_id}

    def test_loaded_creator_is_resolved(self):
        creator = User(
            id=uuid.uuid4(),
            email="a@example.com",
            name="Creator A",
            password_hash="x",
            role=UserRole.CREATOR,
            avatar_url="https://media.test/avatar.jpg",
        )
        post = build_post(creator_id=creator.id, creator=creator)

        ref = creator_ref(post)

        assert isinstance(ref, Resolved)
        assert ref.id == creator.id
        assert ref.as_dict() == {
            "id": creator.id,
            "name": "Creator A",
            "avatar_url": "https://media.test/avatar.jpg",
        }

    def test_full_view_embeds_creator_reference(self):
        creator_id = uuid.uuid4()
        view = resolve_post_view(build_post(creator_id=creator_id))
        assert view.fields["creator"] == {"id": creator_id}
