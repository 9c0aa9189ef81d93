from __future__ import annotations


# Domain-level error the caller can surface directly (e.g., toast/snackbar)
class DomainError(Exception):
    pass


class ValidationError(DomainError, ValueError):
    """Malformed input to a ledger operation. Nothing was written."""


class NotFoundError(DomainError, LookupError):
    """Reference to an order/customer/product/expense id that does not exist."""

    def __init__(self, kind: str, ident: str):
        super().__init__(f"{kind} '{ident}' was not found.")
        self.kind = kind
        self.ident = ident


class InsufficientStockError(DomainError):
    """Requested quantity exceeds what is on hand. No order, no stock change."""

    def __init__(self, product_id: str, product_name: str, requested: int, available: int):
        super().__init__(
            f"Only {available} of '{product_name}' in stock; {requested} requested."
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class StorageUnavailableError(Exception):
    """The underlying store failed; the attempted operation wrote nothing."""
