from __future__ import annotations

import asyncio
import uuid
from dataclasses import replace

from shopping_list.core.items import MAX_QUANTITY, Item
from shopping_list.stores.base import ItemStore


class MemoryItemStore(ItemStore):
    """
    In-process store owned by whoever creates it (the app keeps it on app.state).
    One lock serializes every operation.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        # namespace -> {name: Item}; dicts keep insertion order
        self._items: dict[str, dict[str, Item]] = {}

    async def ensure_namespace(self, namespace: str) -> bool:
        async with self._lock:
            if namespace in self._items:
                return False
            self._items[namespace] = {}
            return True

    async def namespace_exists(self, namespace: str) -> bool:
        async with self._lock:
            return namespace in self._items

    async def upsert(self, namespace: str, name: str, quantity: int, price: float) -> Item | None:
        async with self._lock:
            bucket = self._items.setdefault(namespace, {})
            cur = bucket.get(name)
            if cur is None:
                item = Item(id=str(uuid.uuid4()), name=name, quantity=int(quantity), price=float(price))
            elif cur.quantity + int(quantity) > MAX_QUANTITY:
                return None
            else:
                item = replace(cur, quantity=cur.quantity + int(quantity))
            bucket[name] = item
            return item

    async def add_quantity(self, namespace: str, name: str, delta: int) -> int:
        async with self._lock:
            cur = self._items.get(namespace, {}).get(name)
            if cur is None or not 1 <= cur.quantity + int(delta) <= MAX_QUANTITY:
                return 0
            self._items[namespace][name] = replace(cur, quantity=cur.quantity + int(delta))
            return 1

    async def get(self, namespace: str, name: str) -> Item | None:
        async with self._lock:
            return self._items.get(namespace, {}).get(name)

    async def list(self, namespace: str) -> list[Item]:
        async with self._lock:
            return list(self._items.get(namespace, {}).values())

    async def delete(self, namespace: str, name: str) -> int:
        async with self._lock:
            bucket = self._items.get(namespace, {})
            if name not in bucket:
                return 0
            del bucket[name]
            return 1
