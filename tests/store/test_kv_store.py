# -*- coding: utf-8 -*-
"""键值存储的三种实现"""

import fnmatch

import pytest

from app import create_app
from repositories.kv_store import (
    DatabaseKeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    build_store,
)
from services.tracking_context import TrackingContext
from models import CatalogStep


class _FakeRedis:
    """只实现 RedisKeyValueStore 用到的命令"""

    def __init__(self):
        self.data = {}

    def get(self, name):
        return self.data.get(name)

    def set(self, name, value):
        self.data[name] = value.encode("utf-8")
        return True

    def delete(self, name):
        return 1 if self.data.pop(name, None) is not None else 0

    def scan_iter(self, match="*"):
        for key in list(self.data):
            if fnmatch.fnmatch(key, match):
                yield key.encode("utf-8")


@pytest.fixture()
def db_app():
    app = create_app("testing", {"STORE_BACKEND": "database"})
    with app.app_context():
        yield app


def _exercise(store):
    assert store.get("catalog-steps") is None

    store.set("catalog-steps", [{"id": "s1", "sql_tables": ["t1"]}])
    store.set("app-history", {"entries": [], "current_index": -1})

    assert store.get("catalog-steps") == [{"id": "s1", "sql_tables": ["t1"]}]
    assert sorted(store.keys()) == ["app-history", "catalog-steps"]

    assert store.delete("catalog-steps") is True
    assert store.delete("catalog-steps") is False
    assert store.keys() == ["app-history"]


def test_memory_store_contract():
    _exercise(MemoryKeyValueStore())


def test_memory_store_returns_copies():
    store = MemoryKeyValueStore()
    value = {"items": [1]}
    store.set("k", value)

    value["items"].append(2)

    assert store.get("k") == {"items": [1]}


def test_redis_store_contract_with_prefix():
    client = _FakeRedis()
    client.data["other:key"] = b"1"
    store = RedisKeyValueStore(client, prefix="tcb:")

    _exercise(store)

    assert "tcb:app-history" in client.data
    assert "other:key" in client.data


def test_database_store_contract(db_app):
    _exercise(DatabaseKeyValueStore())


def test_database_backend_persists_tracking_state(db_app):
    ctx = db_app.extensions["tracking"]
    ctx.catalog_steps.add(CatalogStep(id="s1", name="Login"))

    reloaded = TrackingContext(DatabaseKeyValueStore())

    assert [s.id for s in reloaded.catalog_steps.list_all()] == ["s1"]
    assert reloaded.history.current_index == 0


def test_build_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_store({"STORE_BACKEND": "floppy"})


def test_build_store_memory():
    assert isinstance(build_store({"STORE_BACKEND": "memory"}), MemoryKeyValueStore)
