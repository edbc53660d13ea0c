"""User Store: in-memory ordered collection mirrored to a JSON file.

Invariants:
    - The in-memory list is the single source of truth for the process lifetime
    - Every mutation rewrites the whole file (indent=2) before returning
    - Write failures (OSError) mapped to PersistenceError (core/errors.py)
    - One lock guards every read-modify-persist sequence
    - Reads hand out deep copies; stored dicts never escape

Design Decisions:
    - Singleton user_store initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - No rollback on persist failure unless rollback_on_failure=True: memory keeps
      the mutation and the caller reports a server error
    - Malformed file on load is logged and replaced by an empty collection
"""

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from mock_users.core.domain_types import UserId, UserRecord
from mock_users.core.errors import PersistenceError
from mock_users.core.user_records import find_index, merge_fields

logger = logging.getLogger(__name__)


class JsonFileUserStore:
    """Ordered user collection persisted wholesale to a JSON file."""

    def __init__(self, path: str | Path, rollback_on_failure: bool = False):
        self.path = Path(path)
        self.rollback_on_failure = rollback_on_failure
        self._records: list[UserRecord] = []
        self._lock = threading.Lock()

    # ─── Lifecycle ─────────────────────────────────────────────

    def load(self) -> int:
        """Read the durable file once. Returns number of records loaded."""
        with self._lock:
            self._records = self._read_file()
            count = len(self._records)
        logger.info(
            f"Loaded {count} user(s) from {self.path}",
            extra={"operation": "load", "record_count": count},
        )
        return count

    def _read_file(self) -> list[UserRecord]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(
                f"Error reading users data from {self.path}: {e}",
                extra={"operation": "load"},
            )
            return []
        if not isinstance(data, list) or not all(
            isinstance(item, dict) for item in data
        ):
            logger.warning(
                f"Users file {self.path} is not a list of objects, starting empty",
                extra={"operation": "load"},
            )
            return []
        return data

    def persist(self) -> None:
        """Overwrite the durable file with the whole collection."""
        with self._lock:
            self._write_file()

    def _write_file(self) -> None:
        try:
            self.path.write_text(
                json.dumps(self._records, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except (OSError, TypeError, ValueError) as e:
            logger.error(
                f"Error writing users data to {self.path}: {e}",
                extra={"operation": "persist", "error_code": "PERSISTENCE_ERROR"},
            )
            raise PersistenceError(str(e), str(self.path))

    def _commit(self, snapshot: list[UserRecord]) -> None:
        """Persist after a mutation; restore snapshot first if configured to."""
        try:
            self._write_file()
        except PersistenceError:
            if self.rollback_on_failure:
                self._records = snapshot
                logger.warning(
                    "Rolled back in-memory mutation after persist failure",
                    extra={"operation": "rollback"},
                )
            raise

    def health_check(self) -> bool:
        """True when the durable file can be (re)written."""
        target = self.path if self.path.exists() else self.path.parent
        return os.access(target, os.W_OK)

    # ─── Reads ─────────────────────────────────────────────────

    def list(self) -> list[UserRecord]:
        with self._lock:
            return copy.deepcopy(self._records)

    def find_by_id(self, user_id: UserId) -> UserRecord | None:
        with self._lock:
            index = find_index(self._records, user_id)
            if index is None:
                return None
            return copy.deepcopy(self._records[index])

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ─── Mutations (each followed by persist) ──────────────────

    def append(self, record: UserRecord) -> UserRecord:
        stored = copy.deepcopy(record)
        with self._lock:
            snapshot = list(self._records)
            self._records.append(stored)
            self._commit(snapshot)
            return copy.deepcopy(stored)

    def replace_fields(
        self, user_id: UserId, partial: dict[str, Any],
    ) -> UserRecord | None:
        """Shallow-merge partial onto the record. None if the id is unknown."""
        with self._lock:
            index = find_index(self._records, user_id)
            if index is None:
                return None
            snapshot = list(self._records)
            merged = merge_fields(self._records[index], copy.deepcopy(partial))
            self._records[index] = merged
            self._commit(snapshot)
            return copy.deepcopy(merged)

    def remove_by_id(self, user_id: UserId) -> bool:
        """Remove the first record with this id. False if the id is unknown."""
        with self._lock:
            index = find_index(self._records, user_id)
            if index is None:
                return False
            snapshot = list(self._records)
            del self._records[index]
            self._commit(snapshot)
            return True


# Singleton (initialized on startup)
user_store: JsonFileUserStore | None = None


def init_store(path: str | Path, **kwargs) -> JsonFileUserStore:
    global user_store
    user_store = JsonFileUserStore(path, **kwargs)
    user_store.load()
    return user_store


def get_user_store() -> JsonFileUserStore:
    """FastAPI dependency for the user store."""
    if user_store is None:
        raise RuntimeError("User store not initialized")
    return user_store
