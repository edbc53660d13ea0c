"""User Request Handler: list, get, create, update, delete over the user store.

Invariants:
    - create/update validate BEFORE touching the store
    - create reports violations before a missing id (validation wins)
    - update validates first, then looks up the path id (400 beats 404)
    - Every mutation is persisted by the store before a payload is returned
    - Unknown ids always raise UserNotFoundError, never a validation or server error

Design Decisions:
    - Failures raised as typed MockUsersError: global handlers render them, routes stay thin
    - Create reports violations as a problem payload, update as {"errors": [...]};
      both shapes are part of the public contract
    - Duplicate ids accepted unless reject_duplicate_ids=True
"""

import logging
from typing import Any

from mock_users.core.domain_types import UserId, UserRecord, UserOperation
from mock_users.core.errors import (
    ErrorContext,
    ResponseShape,
    ValidationFailedError,
    MissingIdentifierError,
    UserNotFoundError,
    DuplicateIdentifierError,
)
from mock_users.core.repository_protocols import UserStore
from mock_users.core.user_records import extract_user_id
from mock_users.core.validate_user import validate_user

logger = logging.getLogger(__name__)


class UserRequestHandler:
    """Orchestrates validation and persistence per user operation."""

    def __init__(self, store: UserStore, reject_duplicate_ids: bool = False):
        self.store = store
        self.reject_duplicate_ids = reject_duplicate_ids

    def list_users(self) -> list[UserRecord]:
        users = self.store.list()
        logger.debug(
            f"Listed {len(users)} user(s)",
            extra={"operation": UserOperation.LIST.value, "record_count": len(users)},
        )
        return users

    def get_user(self, user_id: UserId) -> UserRecord:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(
                user_id, ErrorContext(operation=UserOperation.GET.value),
            )
        return user

    def create_user(self, candidate: dict[str, Any]) -> UserRecord:
        """Validate, require an id, append and persist."""
        violations = validate_user(candidate)
        if violations:
            logger.info(
                f"Rejected user create: {len(violations)} violation(s)",
                extra={"operation": UserOperation.CREATE.value},
            )
            raise ValidationFailedError(
                violations, ResponseShape.PROBLEM_DETAILS,
                ErrorContext(operation=UserOperation.CREATE.value),
            )

        user_id = extract_user_id(candidate)
        if user_id is None:
            raise MissingIdentifierError(
                ErrorContext(operation=UserOperation.CREATE.value),
            )

        if self.reject_duplicate_ids and self.store.find_by_id(user_id) is not None:
            raise DuplicateIdentifierError(
                user_id, ErrorContext(operation=UserOperation.CREATE.value),
            )

        created = self.store.append(candidate)
        logger.info(
            f"Created user {user_id}",
            extra={"user_id": user_id, "operation": UserOperation.CREATE.value},
        )
        return created

    def update_user(self, user_id: UserId, candidate: dict[str, Any]) -> UserRecord:
        """Validate with full-record rules, then shallow-merge onto the stored record."""
        context = ErrorContext(user_id=user_id, operation=UserOperation.UPDATE.value)
        violations = validate_user(candidate)
        if violations:
            raise ValidationFailedError(violations, ResponseShape.ERROR_LIST, context)

        if self.store.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id, context)

        if self.reject_duplicate_ids:
            self._check_id_change(user_id, candidate, context)

        updated = self.store.replace_fields(user_id, candidate)
        if updated is None:
            raise UserNotFoundError(user_id, context)
        logger.info(
            f"Updated user {user_id}",
            extra={"user_id": user_id, "operation": UserOperation.UPDATE.value},
        )
        return updated

    def delete_user(self, user_id: UserId) -> None:
        if not self.store.remove_by_id(user_id):
            raise UserNotFoundError(
                user_id, ErrorContext(operation=UserOperation.DELETE.value),
            )
        logger.info(
            f"Deleted user {user_id}",
            extra={"user_id": user_id, "operation": UserOperation.DELETE.value},
        )

    def _check_id_change(
        self, user_id: UserId, candidate: dict[str, Any], context: ErrorContext,
    ) -> None:
        """Reject a patch that renames the record onto another record's id."""
        new_id = candidate.get("id")
        if not isinstance(new_id, str) or new_id == user_id:
            return
        if self.store.find_by_id(UserId(new_id)) is not None:
            raise DuplicateIdentifierError(new_id, context)
