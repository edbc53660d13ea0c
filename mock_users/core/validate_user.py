"""User Validation: field constraint checks for candidate user records.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Every rule is evaluated; violations are collected, never short-circuited
    - Message order follows rule order (required, names, email, dateOfBirth, document)
    - Patterns match the whole value with ASCII semantics
    - Lengths are counted in UTF-16 code units, as browsers and JSON clients count them

Design Decisions:
    - Return list[str] (not exceptions): the handler decides which error shape
      the violations are reported in (problem payload for create, list for update)
    - "Missing" means JSON-falsy: null, false, "" and 0; objects and arrays are present
"""

import re
from typing import Any

from mock_users.core.domain_types import (
    REQUIRED_FIELDS,
    NAME_FIELDS,
    NAME_MIN_LENGTH,
    NAME_MAX_LENGTH,
    DOCUMENT_ID_MIN_LENGTH,
    DOCUMENT_ID_MAX_LENGTH,
)

EMAIL_PATTERN = re.compile(
    r"[\w-]+(\.[\w-]+)*@([\w-]+\.)+[a-zA-Z]{2,7}", re.ASCII,
)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
COUNTRY_CODE_PATTERN = re.compile(r"[A-Z]{2}")


def is_missing(value: Any) -> bool:
    """True for null, false, empty string and zero."""
    if isinstance(value, (dict, list)):
        return False
    return not value


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units, so astral characters count as two."""
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _length_outside(value: Any, low: int, high: int) -> bool:
    if not isinstance(value, str):
        return True
    length = utf16_length(value)
    return length < low or length > high


def _fails_pattern(value: Any, pattern: re.Pattern) -> bool:
    return not isinstance(value, str) or pattern.fullmatch(value) is None


def check_required(candidate: dict) -> list[str]:
    """Rule 1: required fields present and non-falsy."""
    return [
        f"{name} is required."
        for name in REQUIRED_FIELDS
        if is_missing(candidate.get(name))
    ]


def check_name_lengths(candidate: dict) -> list[str]:
    """Rules 2-3: firstName/lastName between 2 and 50 characters when present."""
    return [
        f"{name} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        for name in NAME_FIELDS
        if not is_missing(candidate.get(name))
        and _length_outside(candidate[name], NAME_MIN_LENGTH, NAME_MAX_LENGTH)
    ]


def check_email(candidate: dict) -> list[str]:
    """Rule 4: email address format when present."""
    email = candidate.get("email")
    if not is_missing(email) and _fails_pattern(email, EMAIL_PATTERN):
        return ["Invalid email format."]
    return []


def check_date_of_birth(candidate: dict) -> list[str]:
    """Rule 5: dateOfBirth is YYYY-MM-DD when present."""
    dob = candidate.get("dateOfBirth")
    if not is_missing(dob) and _fails_pattern(dob, DATE_PATTERN):
        return ["dateOfBirth must be in YYYY-MM-DD format."]
    return []


def check_personal_id_document(candidate: dict) -> list[str]:
    """Rule 6: nested document fields, only when the document is an object."""
    doc = candidate.get("personalIdDocument")
    if not isinstance(doc, dict):
        return []

    violations = []
    document_id = doc.get("documentId")
    if not is_missing(document_id) and _length_outside(
        document_id, DOCUMENT_ID_MIN_LENGTH, DOCUMENT_ID_MAX_LENGTH,
    ):
        violations.append(
            f"documentId must be between {DOCUMENT_ID_MIN_LENGTH} "
            f"and {DOCUMENT_ID_MAX_LENGTH} characters."
        )

    country = doc.get("countryOfIssue")
    if not is_missing(country) and _fails_pattern(country, COUNTRY_CODE_PATTERN):
        violations.append("countryOfIssue must be a 2-letter country code.")

    valid_until = doc.get("validUntil")
    if not is_missing(valid_until) and _fails_pattern(valid_until, DATE_PATTERN):
        violations.append("validUntil must be in YYYY-MM-DD format.")

    return violations


def validate_user(candidate: dict) -> list[str]:
    """Run every rule in order and return all violations. Empty list means valid."""
    return (
        check_required(candidate)
        + check_name_lengths(candidate)
        + check_email(candidate)
        + check_date_of_birth(candidate)
        + check_personal_id_document(candidate)
    )
