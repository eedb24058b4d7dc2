from __future__ import annotations

import time

from shopping_list.db.session import db_execute, db_fetch_one


class NamespacesRepo:
    """
    Table expected:
      shopping_namespaces (
        namespace varchar(64) PRIMARY KEY,
        created_ts int
      )
    """

    @staticmethod
    async def ensure(namespace: str) -> bool:
        """
        Returns True if the namespace was created by this call.
        """
        q = """
        INSERT INTO shopping_namespaces (namespace, created_ts)
        VALUES (:ns, :ts)
        ON CONFLICT (namespace) DO NOTHING
        """
        n = await db_execute(q, {"ns": str(namespace), "ts": int(time.time())})
        return n > 0

    @staticmethod
    async def exists(namespace: str) -> bool:
        q = """
        SELECT 1
        FROM shopping_namespaces
        WHERE namespace = :ns
        LIMIT 1
        """
        row = await db_fetch_one(q, {"ns": str(namespace)})
        return bool(row)
