# storefront/utils/firestore.py
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def snapshot_to_dict(snap) -> Optional[Dict[str, Any]]:
    """Document data plus its `id`; None when the document does not exist."""
    if snap is None or not snap.exists:
        return None
    data = snap.to_dict() or {}
    for key in ("created_at", "updated_at"):
        ts = data.get(key)
        if hasattr(ts, "to_datetime"):
            data[key] = ts.to_datetime()
    data["id"] = snap.id
    return data


def snapshots_by_id(snaps: Iterable) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for s in snaps:
        d = snapshot_to_dict(s)
        if d is not None:
            out[s.id] = d
    return out


def newest_first(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Sorted in Python so no composite index is needed for (user_id, created_at)
    return sorted(rows, key=lambda r: r.get("created_at") or EPOCH, reverse=True)
