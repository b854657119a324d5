"""Order and OrderLine repository interfaces.

The Service Layer depends exclusively on these contracts (DIP).
Lines are read through an explicit query (``list_for_order``) instead
of an always-attached collection on the order.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderLine


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order record."""


class IOrderLineRepository(IRepository["OrderLine"]):
    """Repository contract for OrderLine records."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> List[OrderLine]:
        """Return the lines of an order in insertion order."""
