"""
Post API Tests

Drive the post endpoints end to end through the FastAPI app.
"""

import pytest


def bearer(data: dict) -> dict:
    return {"Authorization": f"Bearer {data['token']}"}


class TestPostLifecycle:
    """A creator's post as seen by anonymous visitors."""

    @pytest.mark.asyncio
    async def test_free_post_turns_into_preview_when_gated(self, client, register):
        creator = await register("a@example.com", role="creator")

        created = await client.post(
            "/api/v1/posts/",
            json={"title": "Hi", "type": "text", "content": "hello", "access_type": "free"},
            headers=bearer(creator),
        )
        assert created.status_code == 201
        post_id = created.json()["data"]["id"]

        anonymous = await client.get(f"/api/v1/posts/{post_id}")
        assert anonymous.json()["data"]["content"] == "hello"

        updated = await client.put(
            f"/api/v1/posts/{post_id}",
            json={"access_type": "supporter-only"},
            headers=bearer(creator),
        )
        assert updated.status_code == 200

        profile = await client.get(f"/api/v1/creator-profile/{creator['user']['id']}")
        locked = profile.json()["data"]["posts"]["locked"]
        assert len(locked) == 1
        assert locked[0]["title"] == "Hi"
        assert locked[0]["is_locked"] is True
        assert locked[0]["access_type"] == "supporter-only"
        assert "content" not in locked[0]

        single = await client.get(f"/api/v1/posts/{post_id}")
        assert "content" not in single.json()["data"]

        own = await client.get(f"/api/v1/posts/{post_id}", headers=bearer(creator))
        assert own.json()["data"]["content"] == "hello"

    @pytest.mark.asyncio
    async def test_list_envelope_has_pagination(self, client, register):
        creator = await register("a@example.com")
        for i in range(3):
            await client.post(
                "/api/v1/posts/",
                json={"title": f"Post {i}", "type": "text", "content": "body"},
                headers=bearer(creator),
            )

        response = await client.get("/api/v1/posts/", params={"limit": 2})

        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "current_page": 1,
            "total_pages": 2,
            "total_posts": 3,
            "has_next_page": True,
            "has_previous_page": False,
        }

    @pytest.mark.asyncio
    async def test_creator_posts_unknown_creator(self, client):
        response = await client.get("/api/v1/posts/creator/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Creator not found"}

    @pytest.mark.asyncio
    async def test_delete_post(self, client, register, media_store):
        creator = await register("a@example.com")
        created = await client.post(
            "/api/v1/posts/",
            json={"title": "Bye", "type": "text", "content": "soon gone"},
            headers=bearer(creator),
        )
        post_id = created.json()["data"]["id"]

        deleted = await client.delete(f"/api/v1/posts/{post_id}", headers=bearer(creator))
        missing = await client.get(f"/api/v1/posts/{post_id}")

        assert deleted.status_code == 200
        assert missing.status_code == 404


class TestPostPermissions:
    """Role and ownership checks over HTTP."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.post(
            "/api/v1/posts/",
            json={"title": "Hi", "type": "text", "content": "hello"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_supporter_cannot_create(self, client, register):
        supporter = await register("s@example.com", role="supporter")

        response = await client.post(
            "/api/v1/posts/",
            json={"title": "Hi", "type": "text", "content": "hello"},
            headers=bearer(supporter),
        )

        assert response.status_code == 403
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_other_creator_cannot_update(self, client, register):
        owner = await register("owner@example.com")
        intruder = await register("intruder@example.com")
        created = await client.post(
            "/api/v1/posts/",
            json={"title": "Mine", "type": "text", "content": "hello"},
            headers=bearer(owner),
        )
        post_id = created.json()["data"]["id"]

        response = await client.put(
            f"/api/v1/posts/{post_id}",
            json={"title": "Stolen"},
            headers=bearer(intruder),
        )
        after = await client.get(f"/api/v1/posts/{post_id}")

        assert response.status_code == 403
        assert after.json()["data"]["title"] == "Mine"


class TestPostValidation:
    """Field checks at the request boundary."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload,field",
        [
            ({"title": "x" * 201, "type": "text", "content": "hello"}, "title"),
            ({"title": "   ", "type": "text", "content": "hello"}, "title"),
            ({"title": "Hi", "type": "text", "content": "x" * 5001}, "content"),
            ({"title": "Hi", "type": "poem", "content": "hello"}, "type"),
            ({"title": "Hi", "type": "videoEmbed", "content": "hello"}, "video_embed_url"),
            (
                {"title": "Hi", "type": "videoEmbed", "content": "hello", "video_embed_url": "https://example.com/v"},
                "video_embed_url",
            ),
            ({"title": "Hi", "type": "link", "content": "hello", "link_url": "not a url"}, "link_url"),
            ({"title": "Hi", "type": "text", "content": "hello", "access_type": "vip"}, "access_type"),
            (
                {"title": "Hi", "type": "text", "content": "hello", "access_type": "membership-only"},
                "membership_tier_required",
            ),
        ],
    )
    async def test_rejects_invalid_fields(self, client, register, payload, field):
        creator = await register("a@example.com")

        response = await client.post("/api/v1/posts/", json=payload, headers=bearer(creator))

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert field in {error["field"] for error in body["errors"]}

    @pytest.mark.asyncio
    async def test_video_message_is_readable(self, client, register):
        creator = await register("a@example.com")

        response = await client.post(
            "/api/v1/posts/",
            json={"title": "Hi", "type": "videoEmbed", "content": "hello", "video_embed_url": "https://example.com/v"},
            headers=bearer(creator),
        )

        messages = [error["message"] for error in response.json()["errors"]]
        assert "Video embed URL must be from YouTube or Vimeo" in messages

    @pytest.mark.asyncio
    async def test_accepts_youtube_embed(self, client, register):
        creator = await register("a@example.com")

        response = await client.post(
            "/api/v1/posts/",
            json={
                "title": "Watch",
                "type": "videoEmbed",
                "content": "new video",
                "video_embed_url": "https://www.youtube.com/embed/dQw4w9WgXcQ",
            },
            headers=bearer(creator),
        )

        assert response.status_code == 201
        assert response.json()["data"]["video_embed_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"


class TestPostImage:
    """Tests for POST /posts/{id}/image."""

    async def _image_post(self, client, creator) -> str:
        created = await client.post(
            "/api/v1/posts/",
            json={"title": "Photo", "type": "image", "content": "look"},
            headers=bearer(creator),
        )
        return created.json()["data"]["id"]

    @pytest.mark.asyncio
    async def test_upload(self, client, register, media_store, png_bytes):
        creator = await register("a@example.com")
        post_id = await self._image_post(client, creator)

        response = await client.post(
            f"/api/v1/posts/{post_id}/image",
            files={"image": ("photo.png", png_bytes, "image/png")},
            headers=bearer(creator),
        )

        assert response.status_code == 200
        assert response.json()["data"]["media_url"].startswith("https://media.test/posts/")
        assert media_store.puts == [("posts", f"post_{post_id}", "image/png")]

    @pytest.mark.asyncio
    async def test_missing_file(self, client, register, media_store):
        creator = await register("a@example.com")
        post_id = await self._image_post(client, creator)

        response = await client.post(f"/api/v1/posts/{post_id}/image", headers=bearer(creator))

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No image file provided"}
        assert media_store.puts == []

    @pytest.mark.asyncio
    async def test_wrong_file_type(self, client, register, media_store):
        creator = await register("a@example.com")
        post_id = await self._image_post(client, creator)

        response = await client.post(
            f"/api/v1/posts/{post_id}/image",
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=bearer(creator),
        )

        assert response.status_code == 400
        assert media_store.puts == []
