"""
Pytest Configuration and Fixtures

Provides reusable async fixtures for testing the Creatorhub Backend:
an in-memory SQLite database, record factories, a recording media store
and an HTTP client bound to the FastAPI app.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="creatorhub-uploads-"))
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token, hash_password
from app.models import AccessType, MembershipTier, Post, PostType, User, UserRole
from app.services.media_service import MediaStore, MediaStoreError


TEST_PASSWORD = "password123"
_PASSWORD_HASH = hash_password(TEST_PASSWORD)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


# ==================== Database Fixtures ====================

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


# ==================== Record Factories ====================

@pytest.fixture
def make_user(db_session):
    """
    Factory fixture creating committed users.

    Usage:
        creator = await make_user(role=UserRole.CREATOR)
    """
    counter = {"n": 0}

    async def _make(
        role: UserRole = UserRole.CREATOR,
        email: Optional[str] = None,
        name: Optional[str] = None,
        avatar_url: str = "",
    ) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            name=name or f"User {counter['n']}",
            password_hash=_PASSWORD_HASH,
            role=role,
            avatar_url=avatar_url,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_post(db_session):
    """
    Factory fixture creating committed posts.

    `minutes` offsets created_at from a fixed base so ordering is explicit.
    """

    async def _make(
        creator: User,
        title: str = "A post",
        access_type: AccessType = AccessType.FREE,
        is_locked: bool = False,
        post_type: PostType = PostType.TEXT,
        content: str = "Post body",
        media_url: str = "",
        minutes: int = 0,
        tier: Optional[MembershipTier] = None,
    ) -> Post:
        created_at = BASE_TIME + timedelta(minutes=minutes)
        post = Post(
            creator_id=creator.id,
            title=title,
            type=post_type,
            content=content,
            media_url=media_url,
            access_type=access_type,
            is_locked=is_locked,
            membership_tier_required=tier.id if tier else None,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(post)
        await db_session.commit()
        return post

    return _make


@pytest.fixture
def make_tier(db_session):
    async def _make(creator: User, title: str = "Gold", price: float = 10.0) -> MembershipTier:
        tier = MembershipTier(
            creator_id=creator.id,
            title=title,
            description=f"{title} membership",
            price=price,
            benefits=["Early access"],
        )
        db_session.add(tier)
        await db_session.commit()
        return tier

    return _make


# ==================== Media Fixtures ====================

class RecordingMediaStore(MediaStore):
    """In-memory media store that records every call."""

    def __init__(self, fail_with: Optional[str] = None):
        self.fail_with = fail_with
        self.puts: List[Tuple[str, str, str]] = []
        self.deleted: List[str] = []

    async def put(self, data: bytes, folder: str, name: str, content_type: str) -> str:
        if self.fail_with:
            raise MediaStoreError(self.fail_with)
        self.puts.append((folder, name, content_type))
        return f"https://media.test/{folder}/{name}_{len(self.puts)}.jpg"

    async def delete(self, url: str) -> bool:
        self.deleted.append(url)
        return True


@pytest.fixture
def media_store() -> RecordingMediaStore:
    return RecordingMediaStore()


@pytest.fixture
def failing_media_store():
    """Factory for a store whose every put fails with the given message."""
    def _make(message: str) -> RecordingMediaStore:
        return RecordingMediaStore(fail_with=message)
    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """Smallest useful PNG payload (header is all the checks look at)."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# ==================== HTTP Client Fixtures ====================

@pytest.fixture
def mock_httpx_response():
    """
    Factory fixture to create mock httpx responses.

    Usage:
        response = mock_httpx_response(status_code=200, json_data={"key": "value"})
    """
    def _create_response(status_code: int = 200, json_data: dict = None, text: str = ""):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data or {}
        response.text = text
        return response
    return _create_response


@pytest.fixture
def mock_httpx_client(mock_httpx_response):
    """
    Create a mock httpx.AsyncClient.

    Returns:
        AsyncMock configured for HTTP operations.
    """
    client = AsyncMock()
    client.get = AsyncMock(return_value=mock_httpx_response())
    client.post = AsyncMock(return_value=mock_httpx_response())
    return client


# ==================== API Fixtures ====================

@pytest.fixture
def auth_headers():
    """Bearer header for a user."""
    def _headers(user: User) -> dict:
        token = create_access_token(subject=user.id, role=user.role.value)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest_asyncio.fixture
async def client(session_maker, media_store) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    HTTP client bound to the app, with the database and media store
    swapped for the test ones.
    """
    from app.api.deps import get_media_store_dependency
    from app.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store_dependency] = lambda: media_store

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """
    Register through the API and return the response's data.

    Usage:
        data = await register("ada@example.com", role="creator")
        headers = {"Authorization": f"Bearer {data['token']}"}
    """
    async def _register(
        email: str,
        role: Optional[str] = "creator",
        name: str = "Test User",
        password: str = "secret1",
    ) -> dict:
        payload = {"name": name, "email": email, "password": password}
        if role is not None:
            payload["role"] = role
        response = await client.post("/api/v1/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register
