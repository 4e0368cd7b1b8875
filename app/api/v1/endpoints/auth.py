"""
Authentication Routes

Handles user registration, login and the current-user endpoint.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentUser, DbSession
from app.core.exceptions import ConflictError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.token import Token
from app.schemas.user import AuthResult, UserCreate, UserLogin, UserResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_token(user: User) -> str:
    return create_access_token(subject=user.id, role=user.role.value)


async def _authenticate(db: AsyncSession, email: str, password: str) -> User:
    result = await db.execute(
        select(User).where(User.email == email.lower())
    )
    user = result.scalar_one_or_none()

    # Same error whether the email or the password is wrong
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post(
    "/register",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user account",
)
async def register(
    user_data: UserCreate,
    db: DbSession,
) -> ApiResponse:
    """
    Create a new user account and return it with an access token.

    **Flow:**
    1. Check if email already exists in database
    2. Hash the password using bcrypt
    3. Create new user record
    4. Return the user and a JWT access token

    Raises:
        ConflictError: 409 if email already exists.
    """
    email = user_data.email.lower()
    result = await db.execute(
        select(User.id).where(User.email == email)
    )
    if result.scalar_one_or_none() is not None:
        raise ConflictError("User already exists with this email")

    new_user = User(
        email=email,
        name=user_data.name,
        password_hash=hash_password(user_data.password),
        role=user_data.role,
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("User already exists with this email")
    await db.refresh(new_user)

    logger.info("Registered %s user %s", new_user.role.value, new_user.id)
    return ApiResponse(
        message="User registered successfully",
        data=AuthResult(
            user=UserResponse.model_validate(new_user),
            token=_issue_token(new_user),
        ),
    )


@router.post(
    "/login",
    response_model=ApiResponse,
    summary="Login with email and password",
)
async def login(
    credentials: UserLogin,
    db: DbSession,
) -> ApiResponse:
    """
    Authenticate with a JSON body and return the user plus an access token.

    Raises:
        HTTPException: 401 if credentials are invalid.
    """
    user = await _authenticate(db, credentials.email, credentials.password)
    return ApiResponse(
        message="Login successful",
        data=AuthResult(
            user=UserResponse.model_validate(user),
            token=_issue_token(user),
        ),
    )


@router.post(
    "/token",
    response_model=Token,
    summary="OAuth2 password flow (interactive docs)",
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbSession,
) -> Token:
    """
    Authenticate user and return JWT access token.

    Note: Uses OAuth2PasswordRequestForm for compatibility with
    Swagger UI's built-in authorization feature. The username field
    carries the email.
    """
    user = await _authenticate(db, form_data.username, form_data.password)
    return Token(access_token=_issue_token(user), token_type="bearer")


@router.get(
    "/me",
    response_model=ApiResponse,
    summary="Get the authenticated user",
)
async def me(current_user: CurrentUser) -> ApiResponse:
    return ApiResponse(data=UserResponse.model_validate(current_user))


@router.post(
    "/logout",
    response_model=ApiResponse,
    summary="Logout",
)
async def logout(current_user: CurrentUser) -> ApiResponse:
    """Tokens are stateless; the client simply discards its token."""
    return ApiResponse(message="Logged out successfully")
