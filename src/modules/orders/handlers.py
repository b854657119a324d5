"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderLineAdded, OrderShipped
from shared.domain.events import IEventHandler

logger = structlog.get_logger(__name__)


class OrderLineAddedHandler(IEventHandler[OrderLineAdded]):
    def handle(self, event: OrderLineAdded) -> None:
        logger.info(
            "order_line.event.added",
            order_id=event.aggregate_id,
            line_id=event.line_id,
            product_id=event.product_id,
            quantity=event.quantity,
        )


class OrderShippedHandler(IEventHandler[OrderShipped]):
    def handle(self, event: OrderShipped) -> None:
        logger.info(
            "order.event.shipped",
            order_id=event.aggregate_id,
            shipped_on=event.shipped_on.isoformat(),
        )


order_line_added_handler = OrderLineAddedHandler()
order_shipped_handler = OrderShippedHandler()
