"""
API Dependencies

Reusable dependencies for API routes including authentication and image
uploads.
"""

import uuid
from typing import Annotated, Optional

from fastapi import Depends, File, HTTPException, UploadFile, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.security import decode_access_token
from app.models.user import User
from app.services.media_service import ImageUpload, MediaStore, get_media_store, validate_image


# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

# Optional OAuth2 scheme that doesn't require authentication
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


async def _user_from_token(token: Optional[str], db: AsyncSession) -> Optional[User]:
    """Resolve a bearer token to a user, None when anything is off."""
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id_str: str | None = payload.get("sub")
    if user_id_str is None:
        return None

    try:
        user_id = uuid.UUID(user_id_str)
    except ValueError:
        return None

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    return result.scalar_one_or_none()


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Dependency to get the current authenticated user.

    This dependency:
    1. Extracts the JWT token from the Authorization header
    2. Decodes and validates the token
    3. Fetches the user from the database
    4. Raises 401 if token is invalid or user not found

    Args:
        token: JWT token from Authorization header (auto-extracted).
        db: Database session (auto-injected).

    Returns:
        User: The authenticated user object.

    Raises:
        HTTPException: 401 if authentication fails.
    """
    user = await _user_from_token(token, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Dependency to get the current active user.

    Sub-dependency of get_current_user; the place for account-state checks
    (suspension, verification) once users carry such flags.
    """
    return current_user


async def get_current_user_optional(
    token: Annotated[str | None, Depends(oauth2_scheme_optional)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """
    Dependency to optionally get the current authenticated user.

    Similar to get_current_user but returns None instead of raising
    an exception if no valid token is provided. Used by read endpoints
    where anonymous visitors get previews of gated posts.
    """
    return await _user_from_token(token, db)


def get_media_store_dependency() -> MediaStore:
    """Process-wide media store; overridden in tests."""
    return get_media_store()


async def read_image_upload(
    image: Annotated[Optional[UploadFile], File(description="Image file (jpeg, jpg, png, gif, webp; max 5MB)")] = None,
) -> ImageUpload:
    """
    Read and validate the multipart `image` field before any store call.

    Raises:
        BadRequestError: No file, unsupported type, or over the size limit.
    """
    if image is None:
        return validate_image(None, None, None, settings.MAX_UPLOAD_BYTES)
    # One byte past the limit is enough to reject oversized files
    data = await image.read(settings.MAX_UPLOAD_BYTES + 1)
    return validate_image(data, image.filename, image.content_type, settings.MAX_UPLOAD_BYTES)


# Annotated shorthands used by the endpoint modules
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_active_user)]
OptionalUser = Annotated[Optional[User], Depends(get_current_user_optional)]
MediaStoreDep = Annotated[MediaStore, Depends(get_media_store_dependency)]
ImageFile = Annotated[ImageUpload, Depends(read_image_upload)]
