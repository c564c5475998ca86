from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from storefront.config import collection_name
from storefront.utils.firestore import newest_first, snapshot_to_dict


def _col(db):
    return db.collection(collection_name("reviews"))


def get(db, review_id: str) -> Optional[Dict[str, Any]]:
    return snapshot_to_dict(_col(db).document(review_id).get())


def list_for_listing(db, listing_id: str) -> List[Dict[str, Any]]:
    q = _col(db).where(filter=FieldFilter("listing_id", "==", listing_id)).stream()
    return newest_first([snapshot_to_dict(d) for d in q])


def find_by_user(db, listing_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    q = (
        _col(db)
        .where(filter=FieldFilter("listing_id", "==", listing_id))
        .where(filter=FieldFilter("user_id", "==", user_id))
        .limit(1)
        .stream()
    )
    for d in q:
        return snapshot_to_dict(d)
    return None


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col(db).document()
    ref.set({**data, "created_at": SERVER_TIMESTAMP})
    return snapshot_to_dict(ref.get())


def update(db, review_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col(db).document(review_id)
    ref.update({**patch, "updated_at": SERVER_TIMESTAMP})
    return snapshot_to_dict(ref.get())


def delete(db, review_id: str) -> None:
    _col(db).document(review_id).delete()
