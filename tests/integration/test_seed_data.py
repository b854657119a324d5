"""Integration tests for the ``seed_data`` management command."""

from __future__ import annotations

from datetime import date
from io import StringIO

import pytest
from django.core.management import call_command

from modules.core.management.commands.seed_data import OPEN_ORDER_ID, SHIPPED_ORDER_ID
from modules.orders.exceptions import OrderAlreadyShipped
from modules.orders.models import Order, OrderLine
from modules.orders.services import OrderLineService, ShipmentService
from modules.products.models import Product

pytestmark = pytest.mark.integration


def _seed() -> str:
    out = StringIO()
    call_command("seed_data", stdout=out)
    return out.getvalue()


def test_seed_creates_catalogue_and_orders():
    output = _seed()

    assert "Seed completed: products=4, orders=2, lines=1" in output
    assert Product.objects.count() == 4
    assert Order.objects.get(id=SHIPPED_ORDER_ID).shipped_on == date(1994, 8, 16)
    assert Order.objects.get(id=OPEN_ORDER_ID).shipped_on is None


def test_seeded_line_goes_through_service():
    _seed()

    line = OrderLine.objects.get(order_id=OPEN_ORDER_ID)
    assert line.quantity == 16
    assert Product.objects.get(id=line.product_id).ordered_quantity == 16


def test_seed_is_idempotent():
    _seed()
    output = _seed()

    assert "lines=0" in output
    assert OrderLine.objects.count() == 1
    assert Product.objects.get(id=1).ordered_quantity == 16


def test_seeded_orders_behave_as_expected():
    _seed()
    today = date(2026, 10, 19)

    order = ShipmentService(clock=lambda: today).ship_order(OPEN_ORDER_ID)
    assert order.shipped_on == today
    assert OrderLineService().list_lines(OPEN_ORDER_ID)[0].quantity == 16

    with pytest.raises(OrderAlreadyShipped):
        ShipmentService().ship_order(SHIPPED_ORDER_ID)
