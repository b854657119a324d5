"""Django ORM implementations of the Order and OrderLine repositories.

Row locks are taken with ``select_for_update()``; callers must be inside
the transaction opened by the unit of work.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import (
    IOrderLineRepository,
    IOrderRepository,
)

logger = structlog.get_logger(__name__)

_INVALID_KEY_ERRORS = (ValueError, TypeError, ValidationError)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order.  Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Order.objects.filter(id=id).first()
        except _INVALID_KEY_ERRORS:
            return None

    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Locking the order serializes concurrent shipments and line
        additions on the same order.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except _INVALID_KEY_ERRORS:
            return None

    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info(
            "order.saved",
            order_id=entity.id,
            state=str(entity.state),
            shipped_on=entity.shipped_on.isoformat() if entity.shipped_on else None,
        )
        return entity


class OrderLineDjangoRepository(IOrderLineRepository):
    """Concrete OrderLine repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[OrderLine]:
        try:
            return OrderLine.objects.select_related("product").filter(id=id).first()
        except _INVALID_KEY_ERRORS:
            return None

    def get_for_update(self, id: int) -> Optional[OrderLine]:
        try:
            return OrderLine.objects.select_for_update().filter(id=id).first()
        except _INVALID_KEY_ERRORS:
            return None

    def save(self, entity: OrderLine) -> OrderLine:
        """Persist an order line."""
        entity.save()
        logger.info(
            "order_line.saved",
            line_id=entity.id,
            order_id=entity.order_id,
            product_id=entity.product_id,
            quantity=entity.quantity,
        )
        return entity

    def list_for_order(self, order_id: int) -> List[OrderLine]:
        """Return the lines of an order with the product joined (single query)."""
        return list(
            OrderLine.objects.select_related("product")
            .filter(order_id=order_id)
            .order_by("id")
        )
