"""Domain helpers for records that point at a post or a prayer request."""
from __future__ import annotations

from typing import Any, Optional, Tuple

POST = "post"
DUA_REQUEST = "dua_request"


class InvalidTargetError(ValueError):
    """Raised when a like/bookmark/comment names both targets or neither."""


def resolve_target(post_id: Optional[str], dua_request_id: Optional[str]) -> Tuple[str, str]:
    """Return (kind, id) for the single target, rejecting both/neither."""
    if post_id and dua_request_id:
        raise InvalidTargetError("post_id and dua_request_id are mutually exclusive")
    if post_id:
        return POST, post_id
    if dua_request_id:
        return DUA_REQUEST, dua_request_id
    raise InvalidTargetError("either post_id or dua_request_id is required")


def points_at(record: Any, kind: str, target_id: str) -> bool:
    """True when record's post_id/dua_request_id matches the given target."""
    if kind == POST:
        return record.post_id == target_id and not record.dua_request_id
    return record.dua_request_id == target_id and not record.post_id
