# storefront/routers/reviews.py - listing reviews and average rating
from typing import List

from fastapi import APIRouter, Depends, status

from storefront.config import get_db
from storefront.core.auth import require_non_guest
from storefront.schemas.principal import Principal
from storefront.schemas.review import AverageRatingOut, ReviewCreate, ReviewOut, ReviewUpdate
from storefront.services import reviews as review_service

router = APIRouter(prefix="/reviews", tags=["Reviews"])


# More specific path first
@router.get("/average/{listing_id}", response_model=AverageRatingOut)
def get_average_rating(listing_id: str, db=Depends(get_db)):
    return review_service.average_rating(db, listing_id)


@router.get("/{listing_id}", response_model=List[ReviewOut])
def list_reviews(listing_id: str, db=Depends(get_db)):
    return review_service.list_reviews(db, listing_id)


@router.post("", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(payload: ReviewCreate, principal: Principal = Depends(require_non_guest), db=Depends(get_db)):
    """One review per user per listing; a second one is a 400."""
    return review_service.create_review(db, principal, payload)


@router.put("/{review_id}", response_model=ReviewOut)
def update_review(review_id: str, payload: ReviewUpdate,
                  principal: Principal = Depends(require_non_guest), db=Depends(get_db)):
    return review_service.update_review(db, principal, review_id, payload)


@router.delete("/{review_id}")
def delete_review(review_id: str, principal: Principal = Depends(require_non_guest), db=Depends(get_db)):
    review_service.delete_review(db, principal, review_id)
    return {"message": "Review deleted successfully"}
