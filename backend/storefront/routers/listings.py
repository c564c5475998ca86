"""
# `storefront/routers/listings.py` - Catalog

Public reads and admin-only writes for jewelry listings. Images are stored as hosted URLs.

| Method | Path | Access |
|--------|------|--------|
| GET | `/listings` | public |
| GET | `/listings/id/{listing_id}` | public, 404 if absent |
| GET | `/listings/{category}` | public, ring / necklace / earrings / bracelet; unknown gives [] |
| POST | `/listings` | admin |
| PUT | `/listings/{listing_id}` | admin, partial update |
| DELETE | `/listings/{listing_id}` | admin |

Deleting a listing does not touch carts or orders that reference it; they show it as unresolved.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from storefront.config import get_db
from storefront.core.auth import require_admin
from storefront.core.errors import NotFoundError
from storefront.repositories import listings as listings_repo
from storefront.schemas.listing import ListingCreate, ListingOut, ListingUpdate

logger = logging.getLogger("storefront.listings")

router = APIRouter(prefix="/listings", tags=["Listings"])
admin_router = APIRouter(prefix="/listings", tags=["Admin Listings"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[ListingOut])
def list_listings(db=Depends(get_db)):
    return listings_repo.list_all(db)


@router.get("/id/{listing_id}", response_model=ListingOut)
def get_listing(listing_id: str, db=Depends(get_db)):
    listing = listings_repo.get(db, listing_id)
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


@router.get("/{category}", response_model=List[ListingOut])
def list_by_category(category: str, db=Depends(get_db)):
    # An unknown category is simply an empty result
    return listings_repo.list_all(db, category=category)


@admin_router.post("", response_model=ListingOut, status_code=status.HTTP_201_CREATED)
def create_listing(payload: ListingCreate, db=Depends(get_db)):
    listing = listings_repo.create(db, payload.model_dump())
    logger.info("listing created id=%s", listing["id"])
    return listing


@admin_router.put("/{listing_id}", response_model=ListingOut)
def update_listing(listing_id: str, payload: ListingUpdate, db=Depends(get_db)):
    listing = listings_repo.update(db, listing_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


@admin_router.delete("/{listing_id}")
def delete_listing(listing_id: str, db=Depends(get_db)):
    if not listings_repo.delete(db, listing_id):
        raise NotFoundError("Listing not found")
    logger.info("listing deleted id=%s", listing_id)
    return {"message": "Listing deleted"}
