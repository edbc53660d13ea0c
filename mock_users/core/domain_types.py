"""Domain Types: names and constants for user records.

Invariants:
    - UserId wraps str: ids are compared by exact string equality
    - UserRecord is an open JSON object: unknown attributes are kept verbatim
    - REQUIRED_FIELDS order is the order "is required." violations are reported in

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Records stay plain dicts: the mock stores and echoes whatever the caller sent
"""

from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)

UserRecord = dict[str, Any]


# ─── Field Constraints ───────────────────────────────────────────

REQUIRED_FIELDS: tuple[str, ...] = (
    "firstName", "lastName", "dateOfBirth", "personalIdDocument",
)
NAME_FIELDS: tuple[str, ...] = ("firstName", "lastName")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
DOCUMENT_ID_MIN_LENGTH = 5
DOCUMENT_ID_MAX_LENGTH = 20


# ─── Enums ───────────────────────────────────────────────────────

class UserOperation(str, Enum):
    """Operations exposed over the user collection."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
