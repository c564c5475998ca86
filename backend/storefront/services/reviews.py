# storefront/services/reviews.py
import logging
from typing import Any, Dict, List

from storefront.core.errors import InvalidArgumentError, NotFoundError, PermissionDeniedError
from storefront.repositories import customers as customers_repo
from storefront.repositories import listings as listings_repo
from storefront.repositories import reviews as reviews_repo
from storefront.schemas.principal import Principal
from storefront.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger("storefront.reviews")


def list_reviews(db, listing_id: str) -> List[Dict[str, Any]]:
    return reviews_repo.list_for_listing(db, listing_id)


def average_rating(db, listing_id: str) -> Dict[str, Any]:
    ratings = [int(r.get("rating", 0)) for r in reviews_repo.list_for_listing(db, listing_id)]
    if not ratings:
        return {"average_rating": 0.0, "count": 0}
    return {"average_rating": round(sum(ratings) / len(ratings), 2), "count": len(ratings)}


def create_review(db, principal: Principal, body: ReviewCreate) -> Dict[str, Any]:
    if not listings_repo.get(db, body.listing_id):
        raise NotFoundError("Listing not found")
    if reviews_repo.find_by_user(db, body.listing_id, principal.uid):
        raise InvalidArgumentError("User has already submitted a review for this listing.")

    username = body.username
    if not username:
        profile = customers_repo.get(db, principal.uid) or {}
        username = profile.get("name") or principal.display_name or ""
    review = reviews_repo.create(db, {
        "listing_id": body.listing_id,
        "user_id": principal.uid,
        "username": username,
        "rating": int(body.rating),
        "comment": body.comment,
    })
    logger.info("review created id=%s listing=%s user=%s", review["id"], body.listing_id, principal.uid)
    return review


def _owned_review(db, principal: Principal, review_id: str) -> Dict[str, Any]:
    review = reviews_repo.get(db, review_id)
    if not review:
        raise NotFoundError("Review not found")
    if review.get("user_id") != principal.uid:
        raise PermissionDeniedError("You are not authorized to modify this review.")
    return review


def update_review(db, principal: Principal, review_id: str, body: ReviewUpdate) -> Dict[str, Any]:
    _owned_review(db, principal, review_id)
    patch = body.model_dump(exclude_unset=True, exclude_none=True)
    if not patch:
        return reviews_repo.get(db, review_id)
    return reviews_repo.update(db, review_id, patch)


def delete_review(db, principal: Principal, review_id: str) -> None:
    _owned_review(db, principal, review_id)
    reviews_repo.delete(db, review_id)
    logger.info("review deleted id=%s user=%s", review_id, principal.uid)
