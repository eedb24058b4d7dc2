"""
SQL backend specifics: atomic merge, error wrapping, schema management.
"""
import asyncio
import logging
import os
import sqlite3

import pytest
from alembic import command
from alembic.config import Config

from shopping_list import storage
from shopping_list.config import settings
from shopping_list.core.errors import InternalError, StorageError
from shopping_list.core.items import MAX_QUANTITY
from shopping_list.db.migrations import run_migrations
from shopping_list.db.session import db_execute, db_fetch_all
from shopping_list.repo.items import ShoppingItemsRepo
from shopping_list.repo.namespaces import NamespacesRepo

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

pytestmark = pytest.mark.unit


async def test_concurrent_creates_of_same_name_merge(sql_store):
    await storage.ensure_schema(sql_store, "alice")

    await asyncio.gather(
        *[storage.upsert_item(sql_store, "alice", "milk", quantity=1) for _ in range(5)]
    )

    rows = await db_fetch_all(
        "SELECT name, quantity FROM shopping_items WHERE namespace = :ns", {"ns": "alice"}
    )
    assert rows == [{"name": "milk", "quantity": 5}]


async def test_upsert_keeps_first_id(sql_store):
    await NamespacesRepo.ensure("alice")
    first = await ShoppingItemsRepo.upsert("alice", "milk", 2, 1.5)
    second = await ShoppingItemsRepo.upsert("alice", "milk", 1, 0.0)

    assert first["id"] == second["id"]
    assert second["quantity"] == 3
    assert second["price"] == 1.5


async def test_namespace_ensure_reports_creation(sql_store):
    assert await NamespacesRepo.ensure("alice") is True
    assert await NamespacesRepo.ensure("alice") is False
    assert await NamespacesRepo.exists("alice") is True
    assert await NamespacesRepo.exists("bob") is False


async def test_add_quantity_guard(sql_store):
    await NamespacesRepo.ensure("alice")
    await ShoppingItemsRepo.upsert("alice", "milk", 2, 0.0)

    assert await ShoppingItemsRepo.add_quantity("alice", "milk", -1) == 1
    assert await ShoppingItemsRepo.add_quantity("alice", "milk", -1) == 0
    assert await ShoppingItemsRepo.add_quantity("alice", "nope", 1) == 0


async def test_repo_writes_stay_within_quantity_column(sql_store):
    await NamespacesRepo.ensure("alice")
    row = await ShoppingItemsRepo.upsert("alice", "milk", MAX_QUANTITY - 1, 0.0)
    assert row["quantity"] == MAX_QUANTITY - 1

    assert await ShoppingItemsRepo.upsert("alice", "milk", 2, 0.0) is None
    assert await ShoppingItemsRepo.add_quantity("alice", "milk", 2) == 0
    assert await ShoppingItemsRepo.add_quantity("alice", "milk", 1) == 1

    rows = await db_fetch_all("SELECT quantity FROM shopping_items WHERE namespace = :ns", {"ns": "alice"})
    assert rows == [{"quantity": MAX_QUANTITY}]


async def test_migrations_are_idempotent(sql_store):
    await storage.upsert_item(sql_store, "alice", "milk", quantity=2)

    await run_migrations()

    items = await storage.list_items(sql_store, "alice")
    assert [(i.name, i.quantity) for i in items] == [("milk", 2)]


async def test_sql_errors_become_storage_errors(sql_store):
    await storage.upsert_item(sql_store, "alice", "milk")
    await db_execute("DROP TABLE shopping_items")

    with pytest.raises(StorageError) as exc_info:
        await storage.list_items(sql_store, "alice")

    err = exc_info.value
    assert isinstance(err, InternalError)
    assert err.original_exception is not None


def test_alembic_upgrade_creates_schema(sqlite_db, tmp_path):
    cfg = Config()
    cfg.set_main_option("script_location", os.path.join(ROOT, "alembic"))

    command.upgrade(cfg, "head")

    with sqlite3.connect(tmp_path / "shopping.db") as conn:
        tables = {
            r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {"shopping_namespaces", "shopping_items", "alembic_version"} <= tables

    command.downgrade(cfg, "base")

    with sqlite3.connect(tmp_path / "shopping.db") as conn:
        tables = {
            r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert "shopping_items" not in tables


def test_run_migrations_script_respects_flag(monkeypatch, caplog):
    import run_migrations as migration_script

    monkeypatch.setattr(settings, "RUN_MIGRATIONS", False)
    with caplog.at_level(logging.INFO, logger="shopping_list.migrations"):
        assert migration_script.main() is False

    assert "skipping" in caplog.text


def test_run_migrations_script_upgrades_to_head(sqlite_db, tmp_path, monkeypatch):
    import run_migrations as migration_script

    monkeypatch.setattr(settings, "RUN_MIGRATIONS", True)
    cfg = Config()
    cfg.set_main_option("script_location", migration_script.alembic_config().get_main_option("script_location"))

    assert migration_script.main(cfg) is True

    with sqlite3.connect(tmp_path / "shopping.db") as conn:
        tables = {
            r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {"shopping_namespaces", "shopping_items", "alembic_version"} <= tables
