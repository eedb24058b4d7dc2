from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from shopping_list.config import settings

_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """
    Lazily builds the process-wide engine from settings.
    Connections are borrowed per statement batch and never held across requests.
    """
    global _engine
    if _engine is None:
        if settings.is_sqlite:
            # sqlite file: no pooling, connections are cheap and loop-bound
            _engine = create_async_engine(settings.database_url, poolclass=NullPool)
        else:
            _engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    return _engine


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


async def db_fetch_one(query: str, params: dict | None = None) -> dict | None:
    params = params or {}
    # begin() => commit/rollback automatically, so INSERT ... RETURNING is persisted
    async with get_engine().begin() as conn:
        res = await conn.execute(text(query), params)
        row = res.mappings().first()
        return dict(row) if row else None


async def db_fetch_all(query: str, params: dict | None = None) -> list[dict]:
    params = params or {}
    async with get_engine().begin() as conn:
        res = await conn.execute(text(query), params)
        return [dict(r) for r in res.mappings().all()]


async def db_execute(query: str, params: dict | None = None) -> int:
    params = params or {}
    async with get_engine().begin() as conn:
        res = await conn.execute(text(query), params)
        return int(getattr(res, "rowcount", 0) or 0)
