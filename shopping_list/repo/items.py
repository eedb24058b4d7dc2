from __future__ import annotations

import time
import uuid
from typing import Any

from shopping_list.core.items import MAX_QUANTITY
from shopping_list.db.session import db_execute, db_fetch_all, db_fetch_one


class ShoppingItemsRepo:
    """
    Table expected:
      shopping_items (
        id char(36) PRIMARY KEY,
        namespace varchar(64),
        name varchar(255),
        quantity int,
        price double precision,
        created_ts int,
        created_ns bigint,
        UNIQUE (namespace, name)
      )
    """

    @staticmethod
    async def upsert(
        namespace: str,
        name: str,
        quantity: int,
        price: float,
        *,
        max_quantity: int = MAX_QUANTITY,
    ) -> dict[str, Any] | None:
        """
        New name: insert with a fresh id.
        Existing name: quantity += quantity, id and price untouched.
        Returns the stored row after the write, or None when the merged
        quantity would exceed max_quantity (nothing is written then).
        """
        q = """
        INSERT INTO shopping_items (id, namespace, name, quantity, price, created_ts, created_ns)
        VALUES (:id, :ns, :n, :q, :p, :ts, :tns)
        ON CONFLICT (namespace, name)
        DO UPDATE SET quantity = shopping_items.quantity + EXCLUDED.quantity
        WHERE CAST(shopping_items.quantity AS BIGINT) + EXCLUDED.quantity <= :maxq
        RETURNING id, name, quantity, price
        """
        return await db_fetch_one(
            q,
            {
                "id": str(uuid.uuid4()),
                "ns": str(namespace),
                "n": name,
                "q": int(quantity),
                "p": float(price),
                "ts": int(time.time()),
                "tns": time.time_ns(),
                "maxq": int(max_quantity),
            },
        )

    @staticmethod
    async def add_quantity(namespace: str, name: str, delta: int, *, max_quantity: int = MAX_QUANTITY) -> int:
        """
        Returns affected rows. Rows whose quantity would leave [1, max_quantity] are not touched.
        """
        q = """
        UPDATE shopping_items
        SET quantity = quantity + :d
        WHERE namespace = :ns AND name = :n
          AND CAST(quantity AS BIGINT) + :d BETWEEN 1 AND :maxq
        """
        return await db_execute(
            q, {"ns": str(namespace), "n": name, "d": int(delta), "maxq": int(max_quantity)}
        )

    @staticmethod
    async def get_by_name(namespace: str, name: str) -> dict[str, Any] | None:
        q = """
        SELECT id, name, quantity, price
        FROM shopping_items
        WHERE namespace = :ns AND name = :n
        """
        return await db_fetch_one(q, {"ns": str(namespace), "n": name})

    @staticmethod
    async def list_all(namespace: str) -> list[dict[str, Any]]:
        q = """
        SELECT id, name, quantity, price
        FROM shopping_items
        WHERE namespace = :ns
        ORDER BY created_ns ASC, id ASC
        """
        return await db_fetch_all(q, {"ns": str(namespace)}) or []

    @staticmethod
    async def delete_by_name(namespace: str, name: str) -> int:
        q = """
        DELETE FROM shopping_items
        WHERE namespace = :ns AND name = :n
        """
        return await db_execute(q, {"ns": str(namespace), "n": name})
