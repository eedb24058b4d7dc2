from __future__ import annotations

import logging

from shopping_list.db.session import db_execute

log = logging.getLogger(__name__)

# Plain DDL that both Postgres and SQLite accept.
DDL: list[str] = [
    # =========================================================
    # 1) namespace registry
    # =========================================================
    """
    CREATE TABLE IF NOT EXISTS shopping_namespaces (
        namespace VARCHAR(64) PRIMARY KEY,
        created_ts INTEGER NOT NULL DEFAULT 0
    );
    """,

    # =========================================================
    # 2) items, one row per (namespace, name)
    # =========================================================
    """
    CREATE TABLE IF NOT EXISTS shopping_items (
        id CHAR(36) PRIMARY KEY,
        namespace VARCHAR(64) NOT NULL REFERENCES shopping_namespaces(namespace),
        name VARCHAR(255) NOT NULL,
        quantity INTEGER NOT NULL DEFAULT 1,
        price DOUBLE PRECISION NOT NULL DEFAULT 0,
        created_ts INTEGER NOT NULL DEFAULT 0,
        created_ns BIGINT NOT NULL DEFAULT 0,
        CONSTRAINT uq_shopping_items_namespace_name UNIQUE (namespace, name)
    );
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_shopping_items_namespace_created
        ON shopping_items(namespace, created_ns);
    """,
]


async def run_migrations() -> None:
    # one statement per call, drivers reject multi-statement strings
    for q in DDL:
        qq = (q or "").strip()
        if not qq:
            continue
        try:
            await db_execute(qq, {})
        except Exception as e:
            log.exception("Migration failed for query: %s | err=%s", qq[:120], e)
            raise
    log.info("Schema ready (%d statements)", len(DDL))
