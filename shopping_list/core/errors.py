from __future__ import annotations


class ShoppingListError(Exception):
    """Base class for shopping-list errors."""

    status_code = 500

    def __init__(self, message: str = "shopping list error") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ShoppingListError):
    """Bad or missing input: customer, item name, price, quantity delta."""

    status_code = 400


class NotFoundError(ShoppingListError):
    """The operation matched zero rows."""

    status_code = 404


class InternalError(ShoppingListError):
    """Storage, connectivity or decode fault."""

    status_code = 500


class StorageError(InternalError):
    def __init__(self, message: str = "A database error occurred.", original_exception: Exception | None = None):
        super().__init__(message)
        self.original_exception = original_exception


class NamespaceNotFoundError(InternalError):
    """
    The namespace was never provisioned.
    Reads and deletes do not provision, so this stays distinct from NotFoundError.
    """

    def __init__(self, namespace: str) -> None:
        super().__init__(f"namespace {namespace!r} does not exist")
        self.namespace = namespace
