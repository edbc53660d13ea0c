"""Root conftest: shared test configuration and user payload factory."""

import os
from uuid import uuid4

import pytest

os.environ.setdefault("LOG_FORMAT", "text")


def _make_user(**overrides) -> dict:
    user = {
        "id": str(uuid4()),
        "firstName": "Alena",
        "lastName": "Novak",
        "email": "alena.novak@example.com",
        "dateOfBirth": "1990-05-15",
        "personalIdDocument": {
            "documentId": "CD789123",
            "countryOfIssue": "UK",
            "validUntil": "2032-08-20",
        },
    }
    user.update(overrides)
    return user


@pytest.fixture
def make_user():
    """Factory: a valid user record with a fresh id; kwargs replace top-level fields."""
    return _make_user


@pytest.fixture
def valid_user() -> dict:
    return _make_user()
