# storefront/schemas/review.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    listing_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=1000)
    username: Optional[str] = Field(None, description="Shown next to the review; defaults to the profile name")


class ReviewUpdate(CamelModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, min_length=1, max_length=1000)


class ReviewOut(CamelModel):
    id: str
    listing_id: str
    user_id: str
    username: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    comment: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AverageRatingOut(CamelModel):
    average_rating: float
    count: int = 0
