"""
API v1 Router

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, creator_profile, membership_tiers, posts

router = APIRouter()

# Include authentication routes
router.include_router(auth.router)

# Include creator profile routes
router.include_router(creator_profile.router)

# Include post routes
router.include_router(posts.router)

# Include membership tier routes
router.include_router(membership_tiers.router)
