"""
Creator Profile Routes

Public creator pages and the owner's profile management endpoints.
Profiles are created on first use; creators never need a separate
"create profile" call.
"""

from fastapi import APIRouter, Query

from app.api.deps import CurrentUser, DbSession, ImageFile, MediaStoreDep
from app.schemas.common import ApiResponse
from app.schemas.profile import (
    BioUpdate,
    FeaturedPostUpdate,
    ProfileUpdate,
    SocialLinksUpdate,
    SupportAmountsUpdate,
    ThankYouMessageUpdate,
)
from app.services import profile_service


router = APIRouter(prefix="/creator-profile", tags=["Creator Profile"])


@router.get(
    "/own/me",
    response_model=ApiResponse,
    summary="Get my creator profile",
)
async def get_my_profile(
    current_user: CurrentUser,
    db: DbSession,
    include_stats: bool = Query(True, description="Include earnings in stats"),
) -> ApiResponse:
    """
    The caller's own profile, including email, tier ids, full locked posts
    and (by default) earnings.

    **Requirements:**
    - User must have CREATOR role
    """
    profile = await profile_service.get_private_profile(db, current_user, include_stats=include_stats)
    return ApiResponse(data=profile)


@router.put(
    "/own/me",
    response_model=ApiResponse,
    summary="Update my creator profile",
)
async def update_my_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    profile = await profile_service.update_profile(db, current_user, data)
    return ApiResponse(message="Profile updated successfully", data=profile)


@router.put(
    "/me/bio",
    response_model=ApiResponse,
    summary="Update my bio",
)
async def update_bio(
    data: BioUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    profile = await profile_service.update_bio(db, current_user, data.bio)
    return ApiResponse(message="Bio updated successfully", data=profile)


@router.put(
    "/me/social-links",
    response_model=ApiResponse,
    summary="Update my social links",
)
async def update_social_links(
    data: SocialLinksUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    """Only the links present in the body are changed; an empty string clears one."""
    profile = await profile_service.update_social_links(db, current_user, data.socials)
    return ApiResponse(message="Social links updated successfully", data=profile)


@router.put(
    "/me/support-amounts",
    response_model=ApiResponse,
    summary="Set suggested support amounts",
)
async def update_support_amounts(
    data: SupportAmountsUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    profile = await profile_service.set_support_amounts(db, current_user, data.amounts)
    return ApiResponse(message="Support amounts updated successfully", data=profile)


@router.put(
    "/me/thank-you-message",
    response_model=ApiResponse,
    summary="Set the thank-you message",
)
async def update_thank_you_message(
    data: ThankYouMessageUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    profile = await profile_service.set_thank_you_message(db, current_user, data.message)
    return ApiResponse(message="Thank you message updated successfully", data=profile)


@router.put(
    "/me/featured-post",
    response_model=ApiResponse,
    summary="Feature one of my posts",
)
async def update_featured_post(
    data: FeaturedPostUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    profile = await profile_service.set_featured_post(db, current_user, data.post_id)
    return ApiResponse(message="Featured post updated successfully", data=profile)


@router.post(
    "/me/profile-picture",
    response_model=ApiResponse,
    summary="Upload my profile picture",
)
async def upload_profile_picture(
    current_user: CurrentUser,
    db: DbSession,
    image: ImageFile,
    store: MediaStoreDep,
) -> ApiResponse:
    profile = await profile_service.upload_avatar(db, current_user, image, store)
    return ApiResponse(message="Profile picture uploaded successfully", data=profile)


@router.post(
    "/me/banner",
    response_model=ApiResponse,
    summary="Upload my banner",
)
async def upload_banner(
    current_user: CurrentUser,
    db: DbSession,
    image: ImageFile,
    store: MediaStoreDep,
) -> ApiResponse:
    profile = await profile_service.upload_banner(db, current_user, image, store)
    return ApiResponse(message="Banner uploaded successfully", data=profile)


@router.get(
    "/{identifier}",
    response_model=ApiResponse,
    summary="Get a creator's public profile",
)
async def get_public_profile(
    identifier: str,
    db: DbSession,
) -> ApiResponse:
    """
    Public creator page, looked up by user id or email.

    This endpoint is public (no authentication required). Earnings are
    never included and gated posts are reduced to previews.
    """
    profile = await profile_service.get_public_profile(db, identifier)
    return ApiResponse(data=profile)
