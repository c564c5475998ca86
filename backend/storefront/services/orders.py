# storefront/services/orders.py
"""
Order manager: checkout (cart -> order) and admin status changes.

Checkout
- status is always stored as "Pending", whatever the request carries
- the order insert and the cart clear are one atomic batch
- with a `checkout_id` the order id is derived from (user, checkout_id), so replaying the
  same checkout returns the stored order instead of creating a second one
- totals follow `settings.order_total_source`; the caller's figure is always kept as
  `client_total_amount`
"""
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from storefront.config import settings
from storefront.core.errors import InvalidArgumentError, NotFoundError
from storefront.repositories import customers as customers_repo
from storefront.repositories import listings as listings_repo
from storefront.repositories import orders as orders_repo
from storefront.schemas.order import INITIAL_STATUS, ORDER_STATUSES, OrderCreate

logger = logging.getLogger("storefront.orders")

_CHECKOUT_NAMESPACE = uuid.UUID("6f1c3e0a-2b7d-4f43-9a57-0d6c8e5b9a21")


def _order_id(user_id: str, checkout_id: Optional[str]) -> str:
    if checkout_id:
        return str(uuid.uuid5(_CHECKOUT_NAMESPACE, f"{user_id}:{checkout_id}"))
    return str(uuid.uuid4())


def _first_image(images: Any) -> Optional[str]:
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, dict):
            return first.get("url")
        return str(first) if first is not None else None
    return None


def _summary(listing: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": listing["id"],
        "title": listing.get("title", ""),
        "price": float(listing.get("price", 0) or 0),
        "image": _first_image(listing.get("images")),
    }


def catalog_total(db, lines: List[Dict[str, Any]]) -> float:
    """Sum of current listing price x quantity; NotFound if a line's listing is gone."""
    catalog = listings_repo.get_many(db, [ln["product_id"] for ln in lines])
    total = Decimal("0")
    for ln in lines:
        listing = catalog.get(ln["product_id"])
        if not listing:
            raise NotFoundError(f"Product not found: {ln['product_id']}")
        total += Decimal(str(listing.get("price", 0) or 0)) * int(ln["quantity"])
    return float(total.quantize(Decimal("0.01")))


def build_order_doc(payload: OrderCreate, lines: List[Dict[str, Any]], total: float,
                    checkout_id: Optional[str]) -> Dict[str, Any]:
    return {
        "user_id": payload.user_id,
        "products": lines,
        "total_amount": total,
        "client_total_amount": float(payload.total_amount),
        "shipping_info": payload.shipping_info.model_dump(),
        "status": INITIAL_STATUS,
        "checkout_id": checkout_id,
        "created_at": SERVER_TIMESTAMP,
        "updated_at": SERVER_TIMESTAMP,
    }


def create_order(db, payload: OrderCreate, checkout_id: Optional[str] = None) -> Dict[str, Any]:
    # OrderCreate already guarantees at least one line, each with quantity >= 1
    lines = [{"product_id": p.product_id, "quantity": int(p.quantity)} for p in payload.products]

    client_total = float(payload.total_amount)
    if settings.order_total_source == "catalog":
        total = catalog_total(db, lines)
        if abs(total - client_total) >= 0.005:
            logger.warning(
                "order total mismatch user=%s client=%.2f catalog=%.2f; storing catalog total",
                payload.user_id, client_total, total,
            )
    else:
        total = client_total

    order_id = _order_id(payload.user_id, checkout_id)
    doc = build_order_doc(payload, lines, total, checkout_id)
    try:
        orders_repo.create_and_clear_cart(db, order_id, doc, payload.user_id)
    except AlreadyExists:
        logger.info("checkout replay user=%s checkout_id=%s order=%s", payload.user_id, checkout_id, order_id)
        return orders_repo.get(db, order_id)

    logger.info("order created id=%s user=%s lines=%d total=%.2f", order_id, payload.user_id, len(lines), total)
    return orders_repo.get(db, order_id)


def _attach_products(db, orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    ids = [ln.get("product_id") for o in orders for ln in (o.get("products") or [])]
    catalog = listings_repo.get_many(db, ids)
    for o in orders:
        for ln in o.get("products") or []:
            listing = catalog.get(ln.get("product_id"))
            ln["product"] = _summary(listing) if listing else None
    return orders


def list_orders_for_user(db, user_id: str) -> List[Dict[str, Any]]:
    return _attach_products(db, orders_repo.list_for_user(db, user_id))


def list_all_orders(db) -> List[Dict[str, Any]]:
    orders = _attach_products(db, orders_repo.list_all(db))
    people = customers_repo.get_many(db, [o.get("user_id") for o in orders])
    for o in orders:
        c = people.get(o.get("user_id"))
        o["user"] = {"id": c["id"], "name": c.get("name"), "email": c.get("email")} if c else None
    return orders


def update_status(db, order_id: str, new_status: str) -> Dict[str, Any]:
    # No transition graph: any listed status may follow any other
    if new_status not in ORDER_STATUSES:
        raise InvalidArgumentError("Invalid status update.")
    order = orders_repo.get(db, order_id)
    if not order:
        raise NotFoundError("Order not found")

    orders_repo.set_status(db, order_id, new_status)
    logger.info("order status id=%s %s -> %s", order_id, order.get("status"), new_status)
    return orders_repo.get(db, order_id)
