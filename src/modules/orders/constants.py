"""Order domain constants.

Defines the order states and the valid transitions of the order
state machine.  ``SHIPPED`` is terminal: there is no way back to ``OPEN``.
"""

from django.db import models


class OrderState(models.TextChoices):
    OPEN = "OPEN", "Open"
    SHIPPED = "SHIPPED", "Shipped"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderState.OPEN: {OrderState.SHIPPED},
    OrderState.SHIPPED: set(),
}

TERMINAL_STATES: set[str] = {OrderState.SHIPPED}
