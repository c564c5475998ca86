from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.config import get_db
from storefront.core.auth import require_admin
from storefront.schemas.order import OrderCreate, OrderOut, StatusUpdate, StatusUpdateOut
from storefront.services import orders as order_service

router = APIRouter(prefix="/orders", tags=["Orders"])
admin_router = APIRouter(prefix="/orders", tags=["Admin Orders"], dependencies=[Depends(require_admin)])


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    checkout_id: Optional[str] = Query(
        None,
        description="Idempotency key: the same checkout_id never produces a second order (e.g. a UUID).",
    ),
    db=Depends(get_db),
):
    """
    Create an order from the checkout payload and empty the customer's cart.
    Status is always "Pending" regardless of the body.
    """
    return order_service.create_order(db, payload, checkout_id=checkout_id)


@router.get("/user/{user_id}", response_model=List[OrderOut])
def list_user_orders(user_id: str, db=Depends(get_db)):
    return order_service.list_orders_for_user(db, user_id)


@admin_router.get("/admin", response_model=List[OrderOut])
def admin_list_orders(db=Depends(get_db)):
    return order_service.list_all_orders(db)


@admin_router.put("/{order_id}/status", response_model=StatusUpdateOut)
def admin_update_status(order_id: str, payload: StatusUpdate, db=Depends(get_db)):
    """Any valid status may follow any other, including moving back from Delivered."""
    order = order_service.update_status(db, order_id, payload.status)
    return {"message": "Order status updated", "order": order}
