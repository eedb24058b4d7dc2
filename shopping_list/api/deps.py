from __future__ import annotations

from fastapi import Request

from shopping_list.core.errors import InternalError
from shopping_list.stores.base import ItemStore


def get_store(request: Request) -> ItemStore:
    """
    The store is owned by the app (set on startup) and handed to each request.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise InternalError("item store is not initialized")
    return store
