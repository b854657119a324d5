"""Order and OrderLine models.

Business rules implemented:
- An order is ``OPEN`` while ``shipped_on`` is null and ``SHIPPED`` once it
  is set.  The state is derived, never stored twice.
- Lines can only be attached to an open order (enforced at service layer).
- Line quantity is strictly positive (DB constraint + ``clean``).
- Order FK uses CASCADE (a line belongs to exactly one order); product FK
  uses PROTECT (many lines share one product).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderState


class Order(BaseModel):
    """Customer purchase order.

    Created by the order-creation flow (outside this core), which also sets
    ``discount``.  ``shipped_on`` is written exactly once, by the shipment
    service.
    """

    shipped_on: models.DateField = models.DateField(
        null=True, blank=True, default=None
    )
    discount: models.DecimalField = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))],
    )

    class Meta:
        db_table = "orders"
        ordering = ["id"]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        if self.shipped_on is None:
            return OrderState.OPEN
        return OrderState.SHIPPED

    @property
    def is_shipped(self) -> bool:
        return self.state in TERMINAL_STATES

    def can_transition_to(self, new_state: str) -> bool:
        """Check whether transitioning to *new_state* is valid."""
        return new_state in VALID_TRANSITIONS.get(self.state, set())

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.state})"


class OrderLine(BaseModel):
    """One product-and-quantity entry of an order.

    Lines keep insertion order (``ordering = ["id"]``) and are never
    updated or deleted by this core once created.  The same product may
    appear on several lines of one order.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_lines",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["order", "id"], name="order_lines_order_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity}"
