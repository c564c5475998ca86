"""
storefront/schemas/cart.py - Pydantic models for Cart.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel
from storefront.schemas.listing import ListingOut


class AddItemBody(CamelModel):
    user_id: str = Field(..., min_length=1, description="Customer ID owning the cart")
    product_id: str = Field(..., min_length=1, description="Listing ID")
    quantity: int = Field(1, ge=1, description="Quantity to add (>=1)")


class SetQuantityBody(CamelModel):
    # Range is checked by the cart service so that q < 1 is an InvalidArgument, not a schema error
    quantity: int = Field(..., description="New quantity (>=1)")


class CartItemOut(CamelModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    product: Optional[ListingOut] = Field(None, description="Resolved listing; null if it no longer exists")


class CartOut(CamelModel):
    user_id: str
    items: List[CartItemOut] = Field(default_factory=list)
    updated_at: Optional[datetime] = None
