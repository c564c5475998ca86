from typing import Any, Dict, Iterable, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from storefront.config import collection_name
from storefront.utils.firestore import snapshot_to_dict, snapshots_by_id


def _col(db):
    return db.collection(collection_name("listings"))


def get(db, listing_id: str) -> Optional[Dict[str, Any]]:
    return snapshot_to_dict(_col(db).document(listing_id).get())


def get_many(db, listing_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """Resolve several listings in one round trip; missing ids are absent from the result."""
    uniq = list(dict.fromkeys(i for i in listing_ids if i))
    if not uniq:
        return {}
    refs = [_col(db).document(i) for i in uniq]
    return snapshots_by_id(db.get_all(refs))


def list_all(db, category: Optional[str] = None) -> List[Dict[str, Any]]:
    q = _col(db)
    if category:
        q = q.where(filter=FieldFilter("category", "==", category))
    return [snapshot_to_dict(d) for d in q.stream()]


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col(db).document()
    ref.set({**data, "created_at": SERVER_TIMESTAMP})
    return snapshot_to_dict(ref.get())


def update(db, listing_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    ref = _col(db).document(listing_id)
    if not ref.get().exists:
        return None
    if patch:
        ref.update({**patch, "updated_at": SERVER_TIMESTAMP})
    return snapshot_to_dict(ref.get())


def delete(db, listing_id: str) -> bool:
    ref = _col(db).document(listing_id)
    if not ref.get().exists:
        return False
    ref.delete()
    return True
