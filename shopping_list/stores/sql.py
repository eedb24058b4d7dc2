from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from shopping_list.core.errors import StorageError
from shopping_list.core.items import Item
from shopping_list.db.session import dispose_engine
from shopping_list.repo.items import ShoppingItemsRepo
from shopping_list.repo.namespaces import NamespacesRepo
from shopping_list.stores.base import ItemStore

log = logging.getLogger(__name__)


@contextmanager
def _storage_errors(op: str, namespace: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        log.exception("storage fault op=%s namespace=%s err=%s", op, namespace, e)
        raise StorageError(f"storage error during {op}", original_exception=e) from e


class SqlItemStore(ItemStore):
    """Shared tables keyed by namespace, through the pooled async engine."""

    name = "sql"

    async def ensure_namespace(self, namespace: str) -> bool:
        with _storage_errors("ensure_namespace", namespace):
            created = await NamespacesRepo.ensure(namespace)
        if created:
            log.info("namespace provisioned: %s", namespace)
        return created

    async def namespace_exists(self, namespace: str) -> bool:
        with _storage_errors("namespace_exists", namespace):
            return await NamespacesRepo.exists(namespace)

    async def upsert(self, namespace: str, name: str, quantity: int, price: float) -> Item | None:
        with _storage_errors("upsert", namespace):
            row = await ShoppingItemsRepo.upsert(namespace, name, quantity, price)
        return Item.from_row(row) if row else None

    async def add_quantity(self, namespace: str, name: str, delta: int) -> int:
        with _storage_errors("add_quantity", namespace):
            return await ShoppingItemsRepo.add_quantity(namespace, name, delta)

    async def get(self, namespace: str, name: str) -> Item | None:
        with _storage_errors("get", namespace):
            row = await ShoppingItemsRepo.get_by_name(namespace, name)
        return Item.from_row(row) if row else None

    async def list(self, namespace: str) -> list[Item]:
        with _storage_errors("list", namespace):
            rows = await ShoppingItemsRepo.list_all(namespace)
        return [Item.from_row(r) for r in rows]

    async def delete(self, namespace: str, name: str) -> int:
        with _storage_errors("delete", namespace):
            return await ShoppingItemsRepo.delete_by_name(namespace, name)

    async def close(self) -> None:
        await dispose_engine()
