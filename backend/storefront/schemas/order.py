# storefront/schemas/order.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field

from storefront.schemas.common import CamelModel
from storefront.schemas.listing import ListingSummary

# Order statuses (no transition graph: any status may follow any other)
OrderStatus = Literal["Pending", "Order Placed", "Shipped", "Delivered", "Cancelled"]
ORDER_STATUSES = ("Pending", "Order Placed", "Shipped", "Delivered", "Cancelled")
INITIAL_STATUS: OrderStatus = "Pending"


class ShippingInfo(CamelModel):
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: EmailStr
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = ""
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = "India"
    notes: Optional[str] = ""


# (Input) one checkout line
class OrderLineIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


# (Input) checkout payload; a "status" key in the body is ignored
class OrderCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    products: List[OrderLineIn] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    shipping_info: ShippingInfo


class StatusUpdate(CamelModel):
    # Membership in ORDER_STATUSES is checked by the order service (400 "Invalid status update.")
    status: str


class CustomerSummary(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


# (Output) order line, product resolved to display fields when listed
class OrderLineOut(CamelModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    product: Optional[ListingSummary] = None


class OrderOut(CamelModel):
    id: str
    user_id: str
    user: Optional[CustomerSummary] = None
    products: List[OrderLineOut]
    total_amount: float
    client_total_amount: Optional[float] = None
    shipping_info: ShippingInfo
    status: OrderStatus
    checkout_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StatusUpdateOut(CamelModel):
    message: str
    order: OrderOut
