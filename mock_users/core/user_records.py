"""User Records: pure helpers over the ordered user collection.

Invariants:
    - All functions are PURE: inputs are never mutated, new objects are returned
    - Lookup is exact string equality on "id"; first match wins
    - Merge is shallow: nested objects in the patch replace, never deep-merge

Design Decisions:
    - Index-based lookup: the store needs the position to replace/remove in place
      and keep collection order stable
"""

from typing import Any

from mock_users.core.domain_types import UserId, UserRecord


def find_index(records: list[UserRecord], user_id: UserId) -> int | None:
    """Position of the first record whose id equals user_id, or None."""
    for index, record in enumerate(records):
        if record.get("id") == user_id:
            return index
    return None


def merge_fields(existing: UserRecord, patch: dict[str, Any]) -> UserRecord:
    """Shallow merge: patch fields overwrite, unsupplied fields are retained."""
    return {**existing, **patch}


def extract_user_id(candidate: dict) -> UserId | None:
    """The candidate's id if it is a non-empty string, else None."""
    user_id = candidate.get("id")
    if isinstance(user_id, str) and user_id:
        return UserId(user_id)
    return None
