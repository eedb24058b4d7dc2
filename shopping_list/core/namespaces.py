# shopping_list/core/namespaces.py
from __future__ import annotations

import re

from shopping_list.core.errors import ValidationError

MAX_NAMESPACE_LEN = 64

# ASCII only: str.isalnum() would also let through unicode letters/digits
_NAMESPACE_RE = re.compile(r"[A-Za-z0-9]+")


def is_valid_namespace(raw: str | None) -> bool:
    if not raw or len(raw) > MAX_NAMESPACE_LEN:
        return False
    return _NAMESPACE_RE.fullmatch(raw) is not None


def validate_namespace(raw: str | None) -> str:
    """
    Customer identifier -> namespace key.
    Runs before any storage access; anything outside [A-Za-z0-9] is rejected.
    """
    if not raw:
        raise ValidationError("customer name is required")
    if not is_valid_namespace(raw):
        raise ValidationError("invalid customer name")
    return raw
