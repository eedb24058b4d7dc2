from __future__ import annotations

from abc import ABC, abstractmethod

from shopping_list.core.items import Item


class ItemStore(ABC):
    """
    Persistence contract for the item store.
    Inputs are already validated; namespace checks live in shopping_list.storage.
    """

    name: str = "base"

    @abstractmethod
    async def ensure_namespace(self, namespace: str) -> bool:
        """Idempotent. True if the namespace was created by this call."""

    @abstractmethod
    async def namespace_exists(self, namespace: str) -> bool: ...

    @abstractmethod
    async def upsert(self, namespace: str, name: str, quantity: int, price: float) -> Item | None:
        """
        Insert, or merge quantity into the existing row with the same name.
        None (and no write) when the merged quantity would exceed MAX_QUANTITY.
        """

    @abstractmethod
    async def add_quantity(self, namespace: str, name: str, delta: int) -> int:
        """Affected rows; 0 if missing or the result would leave [1, MAX_QUANTITY]."""

    @abstractmethod
    async def get(self, namespace: str, name: str) -> Item | None: ...

    @abstractmethod
    async def list(self, namespace: str) -> list[Item]: ...

    @abstractmethod
    async def delete(self, namespace: str, name: str) -> int: ...

    async def close(self) -> None:
        return None
