# storefront/repositories/carts.py
"""
Carts live at `carts/{user_id}`; the document id is the owner, so a user has at most one cart.

Items are stored as a map keyed by product id:

    {"user_id": "...", "items": {"<product_id>": {"quantity": 2}}, "updated_at": ...}

which keeps one entry per product and lets add/remove be single atomic writes
instead of read-modify-write cycles.
"""
from typing import Any, Dict, List

from google.api_core.exceptions import FailedPrecondition
from google.cloud.firestore_v1 import DELETE_FIELD, SERVER_TIMESTAMP, Increment
from google.cloud.firestore_v1.field_path import FieldPath

from storefront.config import collection_name


class StaleCartError(Exception):
    """The cart changed between read and conditional write."""


def cart_ref(db, user_id: str):
    return db.collection(collection_name("carts")).document(user_id)


def _item_path(product_id: str, *rest: str) -> str:
    # Quotes ids that are not plain identifiers (e.g. ids starting with a digit)
    return FieldPath("items", product_id, *rest).to_api_repr()


def load(db, user_id: str):
    """Return the raw snapshot (callers need `exists` and `update_time`)."""
    return cart_ref(db, user_id).get()


def items_of(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Map form -> list of {product_id, quantity}; entries with quantity < 1 are dropped."""
    raw = data.get("items") or {}
    out = []
    for pid, entry in raw.items():
        qty = int((entry or {}).get("quantity", 0) or 0)
        if qty >= 1:
            out.append({"product_id": pid, "quantity": qty})
    return out


def empty_cart(user_id: str) -> Dict[str, Any]:
    return {"user_id": user_id, "items": {}, "updated_at": SERVER_TIMESTAMP}


def increment_item(db, user_id: str, product_id: str, quantity: int) -> None:
    """Create the cart and/or the item if needed and add `quantity` atomically."""
    cart_ref(db, user_id).set(
        {
            "user_id": user_id,
            "items": {product_id: {"quantity": Increment(quantity)}},
            "updated_at": SERVER_TIMESTAMP,
        },
        merge=True,
    )


def remove_item(db, user_id: str, product_id: str) -> None:
    # Deleting an absent map key is a no-op, so this is idempotent
    cart_ref(db, user_id).update({
        _item_path(product_id): DELETE_FIELD,
        "updated_at": SERVER_TIMESTAMP,
    })


def set_quantity(db, user_id: str, product_id: str, quantity: int, read_snapshot) -> None:
    """Overwrite one item's quantity, only if the cart is unchanged since `read_snapshot`."""
    option = db.write_option(last_update_time=read_snapshot.update_time)
    try:
        cart_ref(db, user_id).update(
            {
                _item_path(product_id, "quantity"): quantity,
                "updated_at": SERVER_TIMESTAMP,
            },
            option=option,
        )
    except FailedPrecondition as exc:
        raise StaleCartError(str(exc)) from exc
