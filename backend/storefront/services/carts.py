# storefront/services/carts.py
"""
Cart manager: one mutable cart per customer.

Every operation checks its references (customer, listing, cart, item), performs at most
one write, then re-reads the cart and resolves each product id to its full listing.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from storefront.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from storefront.repositories import carts as carts_repo
from storefront.repositories import customers as customers_repo
from storefront.repositories import listings as listings_repo
from storefront.utils.firestore import snapshot_to_dict

logger = logging.getLogger("storefront.carts")


def _require_customer(db, user_id: str) -> Dict[str, Any]:
    customer = customers_repo.get(db, user_id)
    if not customer:
        raise NotFoundError("User not found")
    return customer


def _require_cart(db, user_id: str):
    snap = carts_repo.load(db, user_id)
    if not snap.exists:
        raise NotFoundError("Cart not found")
    return snap


def populate(db, user_id: str, data: Dict[str, Any] | None) -> Dict[str, Any]:
    """Cart document -> response dict with each item's listing attached (None if deleted)."""
    items = carts_repo.items_of(data or {})
    catalog = listings_repo.get_many(db, [it["product_id"] for it in items])
    return {
        "user_id": user_id,
        "items": [{**it, "product": catalog.get(it["product_id"])} for it in items],
        "updated_at": (data or {}).get("updated_at"),
    }


def _resolved(db, user_id: str) -> Dict[str, Any]:
    return populate(db, user_id, snapshot_to_dict(carts_repo.load(db, user_id)))


def add_item(db, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
    if quantity < 1:
        raise InvalidArgumentError("Invalid quantity")
    if not listings_repo.get(db, product_id):
        raise NotFoundError("Product not found")
    _require_customer(db, user_id)

    carts_repo.increment_item(db, user_id, product_id, quantity)
    logger.info("cart add user=%s product=%s qty=+%d", user_id, product_id, quantity)
    return _resolved(db, user_id)


def get_cart(db, user_id: str) -> Dict[str, Any]:
    _require_customer(db, user_id)
    return _resolved(db, user_id)


def remove_item(db, user_id: str, product_id: str) -> Dict[str, Any]:
    _require_customer(db, user_id)
    _require_cart(db, user_id)

    carts_repo.remove_item(db, user_id, product_id)
    logger.info("cart remove user=%s product=%s", user_id, product_id)
    return _resolved(db, user_id)


def set_quantity(db, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
    if quantity is None or quantity < 1:
        raise InvalidArgumentError("Invalid quantity")
    _require_customer(db, user_id)
    snap = _require_cart(db, user_id)

    current = {it["product_id"] for it in carts_repo.items_of(snap.to_dict() or {})}
    if product_id not in current:
        raise NotFoundError("Item not found in cart")

    try:
        carts_repo.set_quantity(db, user_id, product_id, quantity, read_snapshot=snap)
    except carts_repo.StaleCartError:
        logger.info("cart set-quantity lost a race user=%s product=%s", user_id, product_id)
        raise ConflictError("Cart was modified concurrently; reload and retry")
    logger.info("cart set user=%s product=%s qty=%d", user_id, product_id, quantity)
    return _resolved(db, user_id)
