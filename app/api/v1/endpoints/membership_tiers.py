"""
Membership Tier Routes
"""

import uuid

from fastapi import APIRouter, status

from app.api.deps import CurrentUser, DbSession
from app.schemas.common import ApiResponse
from app.schemas.tier import PublicTierResponse, TierCreate, TierResponse, TierUpdate
from app.services import tier_service


router = APIRouter(prefix="/membership-tiers", tags=["Membership Tiers"])


@router.get(
    "/creator/{creator_id}",
    response_model=ApiResponse,
    summary="List a creator's membership tiers",
)
async def list_creator_tiers(
    creator_id: uuid.UUID,
    db: DbSession,
) -> ApiResponse:
    tiers = await tier_service.list_creator_tiers(db, creator_id)
    return ApiResponse(data=[PublicTierResponse.model_validate(tier) for tier in tiers])


@router.post(
    "/",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a membership tier",
)
async def create_tier(
    tier_data: TierCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    """
    **Requirements:**
    - User must have CREATOR role
    - Price must be greater than zero
    """
    tier = await tier_service.create_tier(db, current_user, tier_data)
    return ApiResponse(message="Membership tier created successfully", data=TierResponse.model_validate(tier))


@router.put(
    "/{tier_id}",
    response_model=ApiResponse,
    summary="Update a membership tier",
)
async def update_tier(
    tier_id: uuid.UUID,
    tier_data: TierUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    tier = await tier_service.update_tier(db, tier_id, current_user, tier_data)
    return ApiResponse(message="Membership tier updated successfully", data=TierResponse.model_validate(tier))


@router.delete(
    "/{tier_id}",
    response_model=ApiResponse,
    summary="Delete a membership tier",
)
async def delete_tier(
    tier_id: uuid.UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> ApiResponse:
    await tier_service.delete_tier(db, tier_id, current_user)
    return ApiResponse(message="Membership tier deleted successfully")
