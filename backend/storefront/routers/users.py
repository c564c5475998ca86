"""
# `storefront/routers/users.py` - Customer profile

### `GET /users/me`
Returns the caller's profile from `customers/{uid}`. On the first call the profile is
created from the verified token (`name`, `email`), which is how customers enter the
identity store that carts and orders validate against.

### `PUT /users/me`
Sets the display name (and optionally the contact email). Email/password sign-ins carry
no `name` claim, so this is where the name shown on admin order lists and reviews comes from.
"""
import logging

from fastapi import APIRouter, Depends

from storefront.config import get_db
from storefront.core.auth import require_non_guest
from storefront.repositories import customers as customers_repo
from storefront.schemas.principal import Principal
from storefront.schemas.user import CustomerProfile, CustomerProfileUpdate

logger = logging.getLogger("storefront.users")

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=CustomerProfile)
def get_my_profile(principal: Principal = Depends(require_non_guest), db=Depends(get_db)):
    return customers_repo.get_or_create(db, principal.uid, principal.display_name, principal.email)


@router.put("/me", response_model=CustomerProfile)
def update_my_profile(payload: CustomerProfileUpdate,
                      principal: Principal = Depends(require_non_guest), db=Depends(get_db)):
    customers_repo.get_or_create(db, principal.uid, principal.display_name, principal.email)
    profile = customers_repo.update(db, principal.uid, payload.model_dump(exclude_none=True))
    logger.info("profile updated uid=%s", principal.uid)
    return profile
