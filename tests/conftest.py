"""
Shared pytest fixtures.

The SQL backend runs against a throwaway SQLite file per test (aiosqlite),
the memory backend needs nothing.
"""
import os
import tempfile

# must be set before shopping_list.config builds its settings
_TMP_DIR = tempfile.mkdtemp(prefix="shopping-list-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'default.db')}"
os.environ["STORE_BACKEND"] = "sql"
os.environ["RUN_MIGRATIONS"] = "true"

import pytest
from fastapi.testclient import TestClient

from shopping_list.config import settings
from shopping_list.db.migrations import run_migrations
from shopping_list.db.session import dispose_engine
from shopping_list.main import app
from shopping_list.stores.memory import MemoryItemStore
from shopping_list.stores.sql import SqlItemStore


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'shopping.db'}"


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Points settings at a fresh SQLite file for this test."""
    url = sqlite_url(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", url)
    return url


@pytest.fixture
async def sql_store(sqlite_db):
    await dispose_engine()
    await run_migrations()
    store = SqlItemStore()
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture(params=["memory", "sql"])
async def store(request, sqlite_db):
    """Every store test runs against both backends."""
    if request.param == "memory":
        yield MemoryItemStore()
        return

    await dispose_engine()
    await run_migrations()
    sql = SqlItemStore()
    try:
        yield sql
    finally:
        await sql.close()


@pytest.fixture(params=["memory", "sql"])
def client(request, sqlite_db, monkeypatch):
    """App client; startup builds the store from settings and runs migrations for sql."""
    monkeypatch.setattr(settings, "STORE_BACKEND", request.param)
    with TestClient(app) as c:
        yield c
