"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Storage accessed through the UserStore Protocol
    - Implementation provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any object with these methods
    - Synchronous methods: the durable file is fast local IO and every mutation
      must be persisted before the operation reports success
"""

from typing import Any, Protocol

from mock_users.core.domain_types import UserId, UserRecord


class UserStore(Protocol):
    """Contract for the user collection: implemented by shell."""
    def list(self) -> list[UserRecord]: ...
    def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    def append(self, record: UserRecord) -> UserRecord: ...
    def replace_fields(
        self, user_id: UserId, partial: dict[str, Any],
    ) -> UserRecord | None: ...
    def remove_by_id(self, user_id: UserId) -> bool: ...
