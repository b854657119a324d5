"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.  Each one
is classified under the shared taxonomy of ``modules.core.exceptions``
so callers can tell business rejections from store failures.
"""

from __future__ import annotations

from modules.core.exceptions import (
    InsufficientStock,
    InvalidInput,
    InvalidState,
    NotFound,
    TransactionConflict,
)

__all__ = [
    "InsufficientStock",
    "InvalidInput",
    "InvalidQuantity",
    "InvalidRecordKey",
    "OrderAlreadyShipped",
    "OrderNotFound",
    "ProductNotFound",
    "ProductUnavailable",
    "TransactionConflict",
]


class OrderNotFound(NotFound):
    """The requested order does not exist."""


class ProductNotFound(NotFound):
    """The product referenced by an order line does not exist."""


class OrderAlreadyShipped(InvalidState):
    """The order has a shipment date: no line may be added, no re-shipment."""


class ProductUnavailable(InvalidState):
    """The product is flagged unavailable and cannot be ordered."""


class InvalidQuantity(InvalidInput):
    """Quantity is not a strictly positive integer."""


class InvalidRecordKey(InvalidInput):
    """A record key is not a positive integer."""
