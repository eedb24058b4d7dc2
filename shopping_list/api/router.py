# shopping_list/api/router.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from shopping_list import storage
from shopping_list.api.deps import get_store
from shopping_list.api.schemas import ItemCreate, ItemQuantityUpdate, ItemRead
from shopping_list.core.errors import ValidationError
from shopping_list.stores.base import ItemStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/shopping-list", tags=["shopping-list"])

_ALL_METHODS = ["GET", "POST", "PATCH", "PUT", "DELETE"]


# =========================================================
# /shopping-list without a customer segment
# =========================================================
@router.api_route("", methods=_ALL_METHODS, include_in_schema=False)
@router.api_route("/", methods=_ALL_METHODS, include_in_schema=False)
async def missing_customer():
    raise ValidationError("customer name is required")


# =========================================================
# /shopping-list/{customer}
# =========================================================
@router.get("/{customer}", response_model=List[ItemRead])
async def list_shopping_items(customer: str, store: ItemStore = Depends(get_store)):
    items = await storage.list_items(store, customer)
    return [ItemRead.from_item(i) for i in items]


@router.post("/{customer}", response_model=ItemRead)
async def create_shopping_item(
    customer: str,
    payload: ItemCreate,
    store: ItemStore = Depends(get_store),
):
    item = await storage.upsert_item(
        store,
        customer,
        payload.name,
        quantity=payload.quantity,
        price=payload.price,
    )
    return ItemRead.from_item(item)


@router.api_route("/{customer}", methods=["PATCH", "PUT"])
async def patch_item_quantity(
    customer: str,
    payload: ItemQuantityUpdate,
    store: ItemStore = Depends(get_store),
):
    await storage.adjust_quantity(store, customer, payload.name, payload.quantity)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{customer}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_shopping_item(
    customer: str,
    name: Optional[str] = Query(default=None),
    store: ItemStore = Depends(get_store),
):
    await storage.remove_item(store, customer, name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
