from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from storefront.config import collection_name
from storefront.repositories import carts
from storefront.utils.firestore import newest_first, snapshot_to_dict


def _col(db):
    return db.collection(collection_name("orders"))


def get(db, order_id: str) -> Optional[Dict[str, Any]]:
    return snapshot_to_dict(_col(db).document(order_id).get())


def create_and_clear_cart(db, order_id: str, order_doc: Dict[str, Any], user_id: str) -> None:
    """
    Insert the order and empty the owner's cart in one atomic batch.
    Raises google.api_core.exceptions.AlreadyExists if `order_id` is taken; nothing is written then.
    """
    batch = db.batch()
    batch.create(_col(db).document(order_id), order_doc)
    batch.set(carts.cart_ref(db, user_id), carts.empty_cart(user_id))
    batch.commit()


def list_for_user(db, user_id: str) -> List[Dict[str, Any]]:
    q = _col(db).where(filter=FieldFilter("user_id", "==", user_id)).stream()
    return newest_first([snapshot_to_dict(d) for d in q])


def list_all(db) -> List[Dict[str, Any]]:
    return newest_first([snapshot_to_dict(d) for d in _col(db).stream()])


def set_status(db, order_id: str, status: str) -> None:
    _col(db).document(order_id).update({"status": status, "updated_at": SERVER_TIMESTAMP})
