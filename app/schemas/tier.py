"""
Membership Tier Schemas
"""

import uuid
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints


TierTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
TierDescription = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]


class TierCreate(BaseModel):
    title: TierTitle
    description: TierDescription
    price: float = Field(..., gt=0, description="Monthly price")
    benefits: List[str] = Field(default_factory=list)
    stripe_price_id: str = ""


class TierUpdate(BaseModel):
    title: Optional[TierTitle] = None
    description: Optional[TierDescription] = None
    price: Optional[float] = Field(default=None, gt=0)
    benefits: Optional[List[str]] = None
    stripe_price_id: Optional[str] = None


class TierResponse(BaseModel):
    id: uuid.UUID
    creator_id: uuid.UUID
    title: str
    description: str
    price: float
    benefits: List[str]
    stripe_price_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicTierResponse(BaseModel):
    """Tier as shown to anyone; billing references stay private."""

    id: uuid.UUID
    title: str
    description: str
    price: float
    benefits: List[str]

    model_config = {"from_attributes": True}
