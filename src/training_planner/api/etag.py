"""ETag helpers for conditional GET."""

import hashlib
import json
from typing import Any, Optional


def compute_etag(value: Any) -> str:
    """
    Strong ETag for a JSON-serializable value.

    Strings are hashed as-is; anything else is serialized with sorted keys so
    equal content always yields the same tag. Returns the quoted SHA-256
    hex digest.
    """
    payload = value if isinstance(value, str) else json.dumps(
        value, sort_keys=True, separators=(",", ":"), default=str
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f'"{digest}"'


def etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    """Whether an If-None-Match header matches ``etag`` (lists and ``*`` allowed)."""
    if not if_none_match:
        return False
    candidates = [tag.strip() for tag in if_none_match.split(",")]
    return "*" in candidates or etag in candidates or f"W/{etag}" in candidates
