"""User Store: load/persist lifecycle, file format, and failure handling.

Invariants under test:
    - Missing or malformed file loads as an empty collection (never raises)
    - Every mutation rewrites the whole file as indented JSON
    - Persist failure raises PersistenceError; memory keeps the mutation
      unless rollback_on_failure is set
    - Reads return copies
"""

import json
import logging

import pytest

from mock_users.core.errors import PersistenceError
from mock_users.infrastructure.user_store import JsonFileUserStore
import mock_users.infrastructure.user_store as store_module


@pytest.fixture
def users_file(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture
def store(users_file):
    s = JsonFileUserStore(users_file)
    s.load()
    return s


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


# ─── load ────────────────────────────────────────────────────────

def test_missing_file_loads_empty(store, users_file):
    assert store.list() == []
    assert not users_file.exists()


def test_existing_file_is_loaded_in_order(users_file):
    users_file.write_text(json.dumps([{"id": "a"}, {"id": "b"}]))
    store = JsonFileUserStore(users_file)
    assert store.load() == 2
    assert [u["id"] for u in store.list()] == ["a", "b"]


@pytest.mark.parametrize("content", [
    "{not json", "", '{"id": "a"}', '[1, 2]',
])
def test_malformed_file_loads_empty(users_file, content, caplog):
    users_file.write_text(content)
    store = JsonFileUserStore(users_file)
    with caplog.at_level(logging.WARNING):
        assert store.load() == 0
    assert store.list() == []
    assert caplog.records


# ─── persist ─────────────────────────────────────────────────────

def test_append_persists_indented_json(store, users_file, valid_user):
    store.append(valid_user)
    text = users_file.read_text(encoding="utf-8")
    assert text == json.dumps([valid_user], indent=2, ensure_ascii=False)


def test_persist_rewrites_loaded_file_indented(users_file):
    users_file.write_text('[{"id":"a","firstName":"Zoë"}]', encoding="utf-8")
    store = JsonFileUserStore(users_file)
    store.load()
    store.persist()
    text = users_file.read_text(encoding="utf-8")
    assert text == '[\n  {\n    "id": "a",\n    "firstName": "Zoë"\n  }\n]'


def test_persist_empty_collection_creates_file(store, users_file):
    store.persist()
    assert _read(users_file) == []


def test_persist_to_directory_raises(tmp_path):
    target = tmp_path / "users_dir"
    target.mkdir()
    store = JsonFileUserStore(target)
    with pytest.raises(PersistenceError):
        store.persist()


def test_file_mirrors_collection_after_each_mutation(store, users_file, make_user):
    a, b = make_user(id="a"), make_user(id="b")
    store.append(a)
    store.append(b)
    assert _read(users_file) == store.list()

    store.replace_fields("a", {"firstName": "Jon"})
    assert _read(users_file) == store.list()

    store.remove_by_id("b")
    assert _read(users_file) == store.list() == [{**a, "firstName": "Jon"}]


def test_file_is_overwritten_not_appended(store, users_file, make_user):
    store.append(make_user(id="a"))
    store.remove_by_id("a")
    assert _read(users_file) == []


# ─── reads ───────────────────────────────────────────────────────

def test_reads_return_copies(store, valid_user):
    store.append(valid_user)
    fetched = store.find_by_id(valid_user["id"])
    fetched["firstName"] = "Mutated"
    fetched["personalIdDocument"]["documentId"] = "Mutated"
    assert store.find_by_id(valid_user["id"]) == valid_user


def test_append_copies_input(store, valid_user):
    store.append(valid_user)
    valid_user["firstName"] = "Changed"
    assert store.find_by_id(valid_user["id"])["firstName"] == "Alena"


def test_unknown_id_lookups(store):
    assert store.find_by_id("nope") is None
    assert store.replace_fields("nope", {"firstName": "X"}) is None
    assert store.remove_by_id("nope") is False


def test_duplicate_ids_are_stored_and_first_wins(store, make_user):
    store.append(make_user(id="dup", firstName="First"))
    store.append(make_user(id="dup", firstName="Second"))
    assert len(store) == 2
    assert store.find_by_id("dup")["firstName"] == "First"
    store.remove_by_id("dup")
    assert store.find_by_id("dup")["firstName"] == "Second"


# ─── persist failure ─────────────────────────────────────────────

def test_persist_failure_keeps_mutation_by_default(tmp_path, valid_user):
    target = tmp_path / "users_dir"
    target.mkdir()  # writing to a directory path fails
    store = JsonFileUserStore(target)
    with pytest.raises(PersistenceError):
        store.append(valid_user)
    assert store.list() == [valid_user]


def test_persist_failure_rolls_back_when_configured(tmp_path, make_user):
    target = tmp_path / "users_dir"
    target.mkdir()
    store = JsonFileUserStore(target, rollback_on_failure=True)
    store._records = [make_user(id="keep")]

    with pytest.raises(PersistenceError):
        store.append(make_user(id="new"))
    with pytest.raises(PersistenceError):
        store.replace_fields("keep", {"firstName": "Changed"})
    with pytest.raises(PersistenceError):
        store.remove_by_id("keep")

    assert [u["id"] for u in store.list()] == ["keep"]
    assert store.find_by_id("keep")["firstName"] == "Alena"


def test_persist_failure_carries_path(tmp_path, valid_user):
    target = tmp_path / "users_dir"
    target.mkdir()
    store = JsonFileUserStore(target)
    with pytest.raises(PersistenceError) as exc_info:
        store.append(valid_user)
    assert exc_info.value.path == str(target)


# ─── health & singleton ──────────────────────────────────────────

def test_health_check_writable_directory(store):
    assert store.health_check() is True


def test_init_store_sets_singleton_and_loads(users_file, monkeypatch):
    users_file.write_text(json.dumps([{"id": "a"}]))
    monkeypatch.setattr(store_module, "user_store", None)
    store = store_module.init_store(users_file)
    assert store_module.get_user_store() is store
    assert len(store) == 1


def test_get_user_store_before_init_raises(monkeypatch):
    monkeypatch.setattr(store_module, "user_store", None)
    with pytest.raises(RuntimeError):
        store_module.get_user_store()
