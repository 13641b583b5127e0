"""
Hash utilities — deterministic hashing for sync change detection.

The hash of the product list is recorded after every successful pull or
push; comparing it with the current list tells whether local edits are
waiting to be pushed. Derived prices are left out so a gold price tick
alone does not mark the grid as changed.
"""

import hashlib
import json
from typing import Any, Dict, Iterable

DERIVED_KEYS = ("totalCost", "salePrice")


def _user_fields(record: Dict[str, Any]) -> Dict[str, Any]:
    relevant = {k: v for k, v in record.items() if k not in DERIVED_KEYS}
    if not record.get("manualPlating"):
        relevant.pop("platingCost", None)
    return relevant


def compute_products_hash(records: Iterable[Dict[str, Any]]) -> str:
    """
    Compute a deterministic hash of a product list.

    Args:
        records: Products as wire dicts, in grid order

    Returns:
        SHA-256 hash string (first 16 chars for storage efficiency)
    """
    relevant_data = [_user_fields(record) for record in records]

    json_str = json.dumps(relevant_data, sort_keys=True, default=str)
    hash_obj = hashlib.sha256(json_str.encode())

    return hash_obj.hexdigest()[:16]
