"""
storefront/routers/carts.py
Cart endpoints: add by id, get, remove one line, overwrite one line's quantity.

Behavior
- Every response is the whole cart with each product id resolved to its listing
  (`product` is null if the listing was deleted after being added).
- Adding an already-present product increments its quantity; there is no upper bound.
- Removing an absent product succeeds and returns the unchanged cart.
- PATCH with quantity < 1 is a 400 and never touches the cart; a concurrent change between
  read and write is a 409 (reload and retry).
"""
from fastapi import APIRouter, Depends

from storefront.config import get_db
from storefront.schemas.cart import AddItemBody, CartOut, SetQuantityBody
from storefront.services import carts as cart_service

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.post("", response_model=CartOut)
def add_to_cart(payload: AddItemBody, db=Depends(get_db)):
    return cart_service.add_item(db, payload.user_id, payload.product_id, payload.quantity)


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: str, db=Depends(get_db)):
    return cart_service.get_cart(db, user_id)


@router.delete("/{user_id}/{product_id}", response_model=CartOut)
def remove_cart_item(user_id: str, product_id: str, db=Depends(get_db)):
    return cart_service.remove_item(db, user_id, product_id)


@router.patch("/{user_id}/{product_id}", response_model=CartOut)
def update_cart_item_quantity(user_id: str, product_id: str, payload: SetQuantityBody, db=Depends(get_db)):
    return cart_service.set_quantity(db, user_id, product_id, payload.quantity)
