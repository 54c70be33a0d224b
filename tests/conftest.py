"""Shared fixtures: an in-memory key-value store and an app wired to it."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Mapping, Optional

import pytest
from fastapi.testclient import TestClient

from taskapi.core.config import get_settings
from taskapi.core.security import hash_password
from taskapi.main import create_app
from taskapi.services.resource_store import ResourceStore
from taskapi.services.schemas import PRIORITY, TAG, TASK, USER


class InMemoryKeyValueStore:
    """KeyValueStore double following Redis semantics for the commands used."""

    def __init__(self):
        self.counters: dict[str, int] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.sets: dict[str, set[str]] = {}
        self.strings: dict[str, str] = {}

    async def increment(self, counter_key: str) -> int:
        self.counters[counter_key] = self.counters.get(counter_key, 0) + 1
        return self.counters[counter_key]

    async def get_field_map(self, key: str) -> dict[str, str]:
        return dict(self.hashes.get(key, {}))

    async def set_fields(self, key: str, fields: Mapping[str, str]) -> None:
        self.hashes.setdefault(key, {}).update(fields)

    async def set_field(self, key: str, field: str, value: str) -> None:
        self.hashes.setdefault(key, {})[field] = value

    async def delete_key(self, key: str) -> None:
        for space in (self.counters, self.hashes, self.sets, self.strings):
            space.pop(key, None)

    async def add_to_index(self, index_key: str, member: str) -> None:
        self.sets.setdefault(index_key, set()).add(member)

    async def remove_from_index(self, index_key: str, member: str) -> None:
        self.sets.get(index_key, set()).discard(member)

    async def list_index_members(self, index_key: str) -> list[str]:
        return list(self.sets.get(index_key, set()))

    async def scan_keys(self, pattern: str) -> list[str]:
        keys = [*self.counters, *self.hashes, *self.sets, *self.strings]
        return [key for key in keys if fnmatchcase(key, pattern)]

    async def get_string(self, key: str) -> Optional[str]:
        return self.strings.get(key)

    async def set_string(self, key: str, value: str) -> None:
        self.strings[key] = value

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """Use the cheapest bcrypt cost so user tests stay fast."""
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def users(store) -> ResourceStore:
    return ResourceStore(store, USER, password_hasher=hash_password)


@pytest.fixture
def tasks(store) -> ResourceStore:
    return ResourceStore(store, TASK)


@pytest.fixture
def priorities(store) -> ResourceStore:
    return ResourceStore(store, PRIORITY)


@pytest.fixture
def tags(store) -> ResourceStore:
    return ResourceStore(store, TAG)


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store))
