from typing import Any, Dict, Iterable, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from storefront.config import collection_name
from storefront.utils.firestore import snapshot_to_dict, snapshots_by_id


def _col(db):
    return db.collection(collection_name("customers"))


def get(db, uid: str) -> Optional[Dict[str, Any]]:
    return snapshot_to_dict(_col(db).document(uid).get())


def get_many(db, uids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    uniq = list(dict.fromkeys(u for u in uids if u))
    if not uniq:
        return {}
    return snapshots_by_id(db.get_all([_col(db).document(u) for u in uniq]))


def get_or_create(db, uid: str, name: Optional[str], email: Optional[str]) -> Dict[str, Any]:
    """Return the profile, creating it from token claims on first sight."""
    ref = _col(db).document(uid)
    snap = ref.get()
    if not snap.exists:
        ref.set({
            "name": name or "",
            "email": email or "",
            "created_at": SERVER_TIMESTAMP,
        })
        snap = ref.get()
    return snapshot_to_dict(snap)


def update(db, uid: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    """Merge `patch` into the profile; the profile must already exist."""
    ref = _col(db).document(uid)
    ref.update({**patch, "updated_at": SERVER_TIMESTAMP})
    return snapshot_to_dict(ref.get())
