# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasklist.adapters.todo_repository_redis import RedisTodoRepository
from tasklist.app.deps import get_redis
from tasklist.app.main import app

from fakes import FakeRedis


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def repo(fake_redis: FakeRedis) -> RedisTodoRepository:
    return RedisTodoRepository(fake_redis)


@pytest.fixture()
def client(fake_redis: FakeRedis):
    """
    TestClient wired to the in-memory fake.

    The lifespan is not entered here (no ``with TestClient``), so the real
    Redis connection is never opened; handlers get the fake through
    ``get_redis``.
    """
    app.dependency_overrides[get_redis] = lambda: fake_redis
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()
