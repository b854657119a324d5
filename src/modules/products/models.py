"""Product model with stock and ordered-quantity counters.

Business rules implemented:
- An unavailable product cannot be ordered (enforced at service layer).
- Stock on hand cannot be negative.
- ``ordered_quantity`` is the cumulative quantity of every order line
  referencing the product.  It is maintained incrementally by the
  order-line service and never recomputed here.
"""

from __future__ import annotations

import structlog

from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Catalogue item.

    Created and priced by an external collaborator; this core only reads
    ``unavailable`` / ``stock_quantity`` and increments ``ordered_quantity``.
    """

    name = models.CharField(max_length=255)
    unavailable = models.BooleanField(default=False)
    stock_quantity = models.PositiveIntegerField(default=0)
    ordered_quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(ordered_quantity__gte=0),
                name="products_ordered_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError(
                {"stock_quantity": "Stock quantity cannot be negative."}
            )
        if self.ordered_quantity is not None and self.ordered_quantity < 0:
            raise ValidationError(
                {"ordered_quantity": "Ordered quantity cannot be negative."}
            )

    @property
    def is_orderable(self) -> bool:
        return not self.unavailable

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.pk} - {self.name}"
