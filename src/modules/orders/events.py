"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderLineAdded(DomainEvent):
    """Raised when a line is attached to an open order."""

    line_id: int
    product_id: int
    quantity: int


@dataclass(frozen=True, kw_only=True)
class OrderShipped(DomainEvent):
    """Raised when an order moves from OPEN to SHIPPED."""

    shipped_on: date
