from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from shopping_list.core.items import Item


class ItemCreate(BaseModel):
    """
    POST body. Unknown keys (a client-sent id, for instance) are ignored.
    """
    name: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None

    model_config = ConfigDict(extra="ignore")


class ItemQuantityUpdate(BaseModel):
    name: Optional[str] = None
    quantity: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class ItemRead(BaseModel):
    id: str
    name: str
    quantity: int
    price: float

    @classmethod
    def from_item(cls, item: Item) -> "ItemRead":
        return cls(**item.to_dict())
