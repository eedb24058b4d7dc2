# shopping_list/storage.py
from __future__ import annotations

import logging

from shopping_list.config import settings
from shopping_list.core.errors import NamespaceNotFoundError, NotFoundError, ValidationError
from shopping_list.core.items import MAX_QUANTITY, Item, clean_delta, clean_name, clean_price, normalize_quantity
from shopping_list.core.namespaces import validate_namespace
from shopping_list.stores.base import ItemStore

log = logging.getLogger(__name__)


def build_store(backend: str | None = None) -> ItemStore:
    backend = (backend or settings.STORE_BACKEND).lower()
    if backend == "memory":
        from shopping_list.stores.memory import MemoryItemStore

        return MemoryItemStore()
    if backend == "sql":
        from shopping_list.stores.sql import SqlItemStore

        return SqlItemStore()
    raise ValueError(f"unknown store backend: {backend!r}")


async def _require_namespace(store: ItemStore, customer: str | None) -> str:
    # no auto-creation on read/update/delete
    namespace = validate_namespace(customer)
    if not await store.namespace_exists(namespace):
        raise NamespaceNotFoundError(namespace)
    return namespace


# ======================================================================
# Namespace provisioning
# ======================================================================

async def ensure_schema(store: ItemStore, customer: str | None) -> str:
    """
    Idempotent. Not transactional with the write that follows it:
    a namespace left without items is valid and simply reused.
    """
    namespace = validate_namespace(customer)
    await store.ensure_namespace(namespace)
    return namespace


# ======================================================================
# Items
# ======================================================================

async def upsert_item(
    store: ItemStore,
    customer: str | None,
    name: str | None,
    quantity: int | None = None,
    price: float | None = None,
) -> Item:
    """
    Merge-on-create:
    - new name -> inserted with a generated id
    - existing name -> quantity added, id and price kept
    Returns the stored item after the merge.
    """
    namespace = validate_namespace(customer)
    n = clean_name(name)
    q = normalize_quantity(quantity)
    p = clean_price(price)

    await ensure_schema(store, namespace)
    item = await store.upsert(namespace, n, q, p)
    if item is None:
        raise ValidationError(f"quantity of {n!r} would exceed {MAX_QUANTITY}")
    log.info("item upserted namespace=%s name=%s quantity=%s", namespace, n, item.quantity)
    return item


async def adjust_quantity(store: ItemStore, customer: str | None, name: str | None, delta: int | None) -> None:
    n = clean_name(name)
    d = clean_delta(delta)
    namespace = await _require_namespace(store, customer)

    if await store.add_quantity(namespace, n, d):
        return

    # nothing updated: missing, or the result would leave [1, MAX_QUANTITY]
    item = await store.get(namespace, n)
    if item is None:
        raise NotFoundError(f"item {n!r} not found")
    if item.quantity + d < 1:
        raise ValidationError("quantity cannot drop below 1")
    raise ValidationError(f"quantity cannot exceed {MAX_QUANTITY}")


async def get_item(store: ItemStore, customer: str | None, name: str | None) -> Item:
    n = clean_name(name)
    namespace = await _require_namespace(store, customer)
    item = await store.get(namespace, n)
    if item is None:
        raise NotFoundError(f"item {n!r} not found")
    return item


async def list_items(store: ItemStore, customer: str | None) -> list[Item]:
    namespace = await _require_namespace(store, customer)
    return await store.list(namespace)


async def remove_item(store: ItemStore, customer: str | None, name: str | None) -> None:
    n = clean_name(name)
    namespace = await _require_namespace(store, customer)
    if not await store.delete(namespace, n):
        raise NotFoundError(f"item {n!r} not found")
    log.info("item removed namespace=%s name=%s", namespace, n)
