"""API test fixtures: file-backed store in tmp_path + FastAPI test client.

Invariants:
    - Every test gets a fresh users.json under tmp_path
    - get_user_store dependency overridden to the test store
    - user_store singleton patched for the readiness check, which reads it directly

Design Decisions:
    - httpx AsyncClient over ASGITransport: lifespan is not run, so the real
      users.json is never loaded or written
"""

import pytest
from httpx import ASGITransport, AsyncClient

from mock_users.config import Settings, get_settings
from mock_users.infrastructure.user_store import JsonFileUserStore, get_user_store
import mock_users.infrastructure.user_store as store_module
from mock_users.main import app


@pytest.fixture
def users_file(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture
def test_store(users_file):
    store = JsonFileUserStore(users_file)
    store.load()
    return store


@pytest.fixture
def settings_override():
    """Mutable dict of Settings fields applied to the get_settings dependency."""
    return {}


@pytest.fixture
async def client(test_store, settings_override, monkeypatch):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_user_store] = lambda: test_store
    app.dependency_overrides[get_settings] = lambda: Settings(**settings_override)
    monkeypatch.setattr(store_module, "user_store", test_store)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


class UserApi:
    """Thin wrappers over the five user endpoints."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def list_users(self, **kwargs):
        return await self.client.get("/users", **kwargs)

    async def create_user(self, user_data):
        return await self.client.post("/users", json=user_data)

    async def get_user_by_id(self, user_id):
        return await self.client.get(f"/users/{user_id}")

    async def update_user(self, user_id, user_data):
        return await self.client.put(f"/users/{user_id}", json=user_data)

    async def delete_user(self, user_id):
        return await self.client.delete(f"/users/{user_id}")


@pytest.fixture
def user_api(client) -> UserApi:
    return UserApi(client)


@pytest.fixture
def updated_user_data(make_user) -> dict:
    """Full update body without an id."""
    data = make_user(firstName="updatedName1111", lastName="updatedName2222")
    del data["id"]
    return data
