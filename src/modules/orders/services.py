"""Order service layer (Use Cases).

Orchestrates the order-line and shipment business rules.  Every command
runs inside one unit of work: all reads, checks and writes either commit
together or not at all.  All checks run before the first write, so a
rejected call never leaves anything to undo.

Business rules enforced:
- A line needs an existing, open order and an existing, available product.
- Line quantity must be strictly positive.
- Stock on hand must cover the requested quantity.  The comparison uses
  raw ``stock_quantity``; there is no reservation of already-ordered units.
- Adding a line increments ``Product.ordered_quantity`` by the quantity.
- Shipment is a one-time OPEN -> SHIPPED transition stamped with today's
  date; a shipped order accepts no further lines.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, List

import structlog
from django.utils import timezone
from pydantic import ValidationError

from modules.orders.constants import OrderState
from modules.orders.dtos import AddLineDTO, ShipOrderDTO
from modules.orders.events import OrderLineAdded, OrderShipped
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidInput,
    InvalidQuantity,
    InvalidRecordKey,
    OrderAlreadyShipped,
    OrderNotFound,
    ProductNotFound,
    ProductUnavailable,
)
from modules.orders.models import OrderLine
from modules.orders.unit_of_work import DjangoUnitOfWork

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], "AbstractUnitOfWork"]
Clock = Callable[[], date]


def _input_error(exc: ValidationError) -> InvalidInput:
    """Translate a DTO validation failure into the matching ``InvalidInput``."""
    errors = exc.errors()
    if not errors:
        return InvalidInput(str(exc))
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{field}: {first.get('msg', 'invalid value')}"
    if field == "quantity":
        return InvalidQuantity(message)
    return InvalidRecordKey(message)


class OrderLineService:
    """Application service for order-line creation.

    Receives a unit-of-work factory via constructor injection (DIP).
    """

    def __init__(self, uow_factory: UnitOfWorkFactory = DjangoUnitOfWork) -> None:
        self._uow_factory = uow_factory

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_line(self, order_id: int, product_id: int, quantity: int) -> OrderLine:
        """Attach a new line to an open order.

        Steps (first failing check wins):
        1. Validate input.
        2. Lock and resolve the order, then the product.
        3. Check the order is open and the product available.
        4. Check stock on hand covers the quantity.
        5. Increment the product's ordered quantity and save it.
        6. Create and save the line.

        Raises:
            InvalidQuantity: quantity is not a positive integer.
            InvalidRecordKey: a key is not a positive integer.
            OrderNotFound: order does not exist.
            ProductNotFound: product does not exist.
            OrderAlreadyShipped: order already has a shipment date.
            ProductUnavailable: product is flagged unavailable.
            InsufficientStock: stock on hand below the requested quantity.
            TransactionConflict: the store could not commit.
        """
        try:
            dto = AddLineDTO(order_id=order_id, product_id=product_id, quantity=quantity)
        except ValidationError as exc:
            logger.warning(
                "order_line.invalid_input",
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
            )
            raise _input_error(exc) from exc

        log = logger.bind(
            order_id=dto.order_id, product_id=dto.product_id, quantity=dto.quantity
        )
        log.info("order_line.creation_started")

        with structlog.contextvars.bound_contextvars(operation="add_line"):
            with self._uow_factory() as uow:
                order = uow.orders.get_for_update(dto.order_id)
                if order is None:
                    log.warning("order_line.rejected", reason="order_not_found")
                    raise OrderNotFound(f"Order {dto.order_id} not found.")

                product = uow.products.get_for_update(dto.product_id)
                if product is None:
                    log.warning("order_line.rejected", reason="product_not_found")
                    raise ProductNotFound(f"Product {dto.product_id} not found.")

                if order.is_shipped:
                    log.warning("order_line.rejected", reason="order_shipped")
                    raise OrderAlreadyShipped(
                        f"Order {order.id} was already shipped on {order.shipped_on}."
                    )

                if not product.is_orderable:
                    log.warning("order_line.rejected", reason="product_unavailable")
                    raise ProductUnavailable(f"Product {product.id} is unavailable.")

                if product.stock_quantity < dto.quantity:
                    log.warning(
                        "order_line.rejected",
                        reason="insufficient_stock",
                        stock_quantity=product.stock_quantity,
                    )
                    raise InsufficientStock(
                        f"Product {product.id}: requested {dto.quantity}, "
                        f"in stock {product.stock_quantity}."
                    )

                product.ordered_quantity += dto.quantity
                uow.products.save(product)

                line = uow.lines.save(
                    OrderLine(order=order, product=product, quantity=dto.quantity)
                )
                uow.publish_on_commit(
                    OrderLineAdded(
                        aggregate_id=order.id,
                        line_id=line.id,
                        product_id=product.id,
                        quantity=line.quantity,
                    )
                )

        log.info(
            "order_line.created",
            line_id=line.id,
            ordered_quantity=product.ordered_quantity,
        )
        return line

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_lines(self, order_id: int) -> List[OrderLine]:
        """Return the lines of an order in insertion order.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        with self._uow_factory() as uow:
            if uow.orders.get_by_id(order_id) is None:
                raise OrderNotFound(f"Order {order_id} not found.")
            return uow.lines.list_for_order(order_id)


class ShipmentService:
    """Application service for the OPEN -> SHIPPED transition.

    ``clock`` returns the current date; inject a fixed one in tests.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory = DjangoUnitOfWork,
        clock: Clock = timezone.localdate,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    def ship_order(self, order_id: int) -> Order:
        """Mark an order as shipped today.

        Raises:
            InvalidRecordKey: the key is not a positive integer.
            OrderNotFound: order does not exist.
            OrderAlreadyShipped: order was already shipped.
            TransactionConflict: the store could not commit.
        """
        try:
            dto = ShipOrderDTO(order_id=order_id)
        except ValidationError as exc:
            logger.warning("order.invalid_input", order_id=order_id)
            raise _input_error(exc) from exc

        log = logger.bind(order_id=dto.order_id)

        with structlog.contextvars.bound_contextvars(operation="ship_order"):
            with self._uow_factory() as uow:
                order = uow.orders.get_for_update(dto.order_id)
                if order is None:
                    log.warning("order.ship_rejected", reason="order_not_found")
                    raise OrderNotFound(f"Order {dto.order_id} not found.")

                if not order.can_transition_to(OrderState.SHIPPED):
                    log.warning(
                        "order.ship_rejected",
                        reason="already_shipped",
                        shipped_on=order.shipped_on.isoformat(),
                    )
                    raise OrderAlreadyShipped(
                        f"Order {order.id} was already shipped on {order.shipped_on}."
                    )

                order.shipped_on = self._clock()
                uow.orders.save(order)
                uow.publish_on_commit(
                    OrderShipped(aggregate_id=order.id, shipped_on=order.shipped_on)
                )

        log.info("order.shipped", shipped_on=order.shipped_on.isoformat())
        return order

    def get_order(self, order_id: int) -> Order:
        """Retrieve a single order.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order
