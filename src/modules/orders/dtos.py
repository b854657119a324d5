"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
They are the caller-facing contract of the services and are
immutable (``frozen=True``).

- ``AddLineDTO``: input for order-line creation.
- ``ShipOrderDTO``: input for shipment.
- ``OrderLineOutputDTO``: output for a single line.
- ``OrderOutputDTO``: output for an order and its lines.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderLine


def _positive_key(v: int) -> int:
    if v < 1:
        raise ValueError("Record keys must be positive integers.")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AddLineDTO(BaseModel):
    """Immutable DTO for an order-line creation request."""

    model_config = ConfigDict(frozen=True, strict=True)

    order_id: int
    product_id: int
    quantity: int

    @field_validator("order_id", "product_id")
    @classmethod
    def keys_must_be_positive(cls, v: int) -> int:
        return _positive_key(v)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class ShipOrderDTO(BaseModel):
    """Immutable DTO for a shipment request."""

    model_config = ConfigDict(frozen=True, strict=True)

    order_id: int

    @field_validator("order_id")
    @classmethod
    def key_must_be_positive(cls, v: int) -> int:
        return _positive_key(v)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderLineOutputDTO(BaseModel):
    """Immutable DTO for an order line."""

    model_config = ConfigDict(frozen=True)

    id: int
    order_id: int
    product_id: int
    product_name: str
    quantity: int

    @classmethod
    def from_entity(cls, line: OrderLine) -> OrderLineOutputDTO:
        return cls(
            id=line.id,
            order_id=line.order_id,
            product_id=line.product_id,
            product_name=line.product.name,  # type: ignore[attr-defined]
            quantity=line.quantity,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for an order with its lines."""

    model_config = ConfigDict(frozen=True)

    id: int
    state: str
    shipped_on: Optional[date]
    discount: Decimal
    lines: List[OrderLineOutputDTO]

    @classmethod
    def from_entity(cls, order: Order, lines: Iterable[OrderLine]) -> OrderOutputDTO:
        """Build an output DTO from an Order and its lines.

        Lines are passed in explicitly (see ``OrderLineService.list_lines``)
        rather than loaded through the reverse relation.
        """
        return cls(
            id=order.id,
            state=str(order.state),
            shipped_on=order.shipped_on,
            discount=order.discount,
            lines=[OrderLineOutputDTO.from_entity(line) for line in lines],
        )
