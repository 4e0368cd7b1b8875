"""
Post Routes

Endpoints for creating, reading and managing posts. Read endpoints accept
anonymous visitors; gated posts come back as previews unless the viewer
owns or has unlocked them.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, DbSession, ImageFile, MediaStoreDep, OptionalUser
from app.models.enums import AccessType
from app.schemas.common import ApiResponse
from app.schemas.post import PostCreate, PostUpdate
from app.services import post_service


router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "/",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    """
    Create a new post.

    **Requirements:**
    - User must have CREATOR role
    - `video_embed_url` is required for videoEmbed posts
    - `membership_tier_required` is required for membership-only posts and
      must be one of the creator's tiers
    """
    post = await post_service.create_post(db, current_user, post_data)
    return ApiResponse(message="Post created successfully", data=post)


@router.get(
    "/",
    response_model=ApiResponse,
    summary="List posts",
)
async def list_posts(
    db: DbSession,
    viewer: OptionalUser,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    access_type: Optional[AccessType] = Query(None, description="Filter by access type"),
    is_locked: Optional[bool] = Query(None, description="Filter by lock flag"),
    creator_id: Optional[uuid.UUID] = Query(None, description="Filter by creator"),
) -> ApiResponse:
    """
    Paginated list of posts, newest first.

    Public endpoint. Each post is returned in full or as a preview
    depending on the caller.
    """
    posts, pagination = await post_service.list_posts(
        db,
        viewer,
        page=page,
        limit=limit,
        access_type=access_type,
        is_locked=is_locked,
        creator_id=creator_id,
    )
    return ApiResponse(data=posts, pagination=pagination)


@router.get(
    "/creator/{creator_id}",
    response_model=ApiResponse,
    summary="List a creator's posts",
)
async def list_creator_posts(
    creator_id: uuid.UUID,
    db: DbSession,
    viewer: OptionalUser,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    access_type: Optional[AccessType] = Query(None, description="Filter by access type"),
    is_locked: Optional[bool] = Query(None, description="Filter by lock flag"),
) -> ApiResponse:
    posts, pagination = await post_service.list_creator_posts(
        db,
        creator_id,
        viewer,
        page=page,
        limit=limit,
        access_type=access_type,
        is_locked=is_locked,
    )
    return ApiResponse(data=posts, pagination=pagination)


@router.get(
    "/{post_id}",
    response_model=ApiResponse,
    summary="Get a post",
)
async def get_post(
    post_id: uuid.UUID,
    db: DbSession,
    viewer: OptionalUser,
) -> ApiResponse:
    post = await post_service.get_post_view(db, post_id, viewer)
    return ApiResponse(data=post)


@router.put(
    "/{post_id}",
    response_model=ApiResponse,
    summary="Update a post",
)
async def update_post(
    post_id: uuid.UUID,
    post_data: PostUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    """Update the provided fields of a post owned by the caller."""
    post = await post_service.update_post(db, post_id, current_user, post_data)
    return ApiResponse(message="Post updated successfully", data=post)


@router.delete(
    "/{post_id}",
    response_model=ApiResponse,
    summary="Delete a post",
)
async def delete_post(
    post_id: uuid.UUID,
    current_user: CurrentUser,
    db: DbSession,
    store: MediaStoreDep,
) -> ApiResponse:
    await post_service.delete_post(db, post_id, current_user, store)
    return ApiResponse(message="Post deleted successfully")


@router.post(
    "/{post_id}/image",
    response_model=ApiResponse,
    summary="Upload an image for an image post",
)
async def upload_post_image(
    post_id: uuid.UUID,
    current_user: CurrentUser,
    db: DbSession,
    image: ImageFile,
    store: MediaStoreDep,
) -> ApiResponse:
    """
    Attach an image to a post of type image.

    Multipart field `image`; jpeg, jpg, png, gif or webp up to 5MB.
    """
    post = await post_service.upload_post_image(db, post_id, current_user, image, store)
    return ApiResponse(message="Image uploaded successfully", data=post)
