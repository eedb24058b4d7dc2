# shopping_list/core/items.py
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from shopping_list.core.errors import ValidationError

MAX_NAME_LEN = 255
DEFAULT_QUANTITY = 1
DEFAULT_PRICE = 0.0
# quantity column is a 32-bit INTEGER
MAX_QUANTITY = 2_147_483_647


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    quantity: int
    price: float

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Item":
        return cls(
            id=str(row["id"]).strip(),
            name=str(row["name"]),
            quantity=int(row["quantity"]),
            price=float(row["price"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def clean_name(name: str | None) -> str:
    n = (name or "").strip()
    if not n:
        raise ValidationError("item name is required")
    if len(n) > MAX_NAME_LEN:
        raise ValidationError(f"item name is longer than {MAX_NAME_LEN} characters")
    return n


def normalize_quantity(quantity: int | None) -> int:
    # missing or non-positive quantity on create means "one of it"
    if quantity is None or int(quantity) <= 0:
        return DEFAULT_QUANTITY
    if int(quantity) > MAX_QUANTITY:
        raise ValidationError(f"quantity must not exceed {MAX_QUANTITY}")
    return int(quantity)


def clean_price(price: float | None) -> float:
    if price is None:
        return DEFAULT_PRICE
    p = float(price)
    if math.isnan(p) or math.isinf(p):
        raise ValidationError("price must be a finite number")
    if p < 0:
        raise ValidationError("price must not be negative")
    return p


def clean_delta(delta: int | None) -> int:
    if delta is None or int(delta) == 0:
        raise ValidationError("quantity must be a non-zero number")
    if abs(int(delta)) > MAX_QUANTITY:
        raise ValidationError(f"quantity change must not exceed {MAX_QUANTITY}")
    return int(delta)
