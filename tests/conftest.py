from datetime import date

import pytest

from modules.orders.models import Order
from modules.orders.services import OrderLineService, ShipmentService
from modules.products.models import Product

FIXED_TODAY = date(2026, 10, 19)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def product():
    return Product.objects.create(name="Chai", stock_quantity=20)


@pytest.fixture()
def low_stock_product():
    return Product.objects.create(name="Chang", stock_quantity=5)


@pytest.fixture()
def unavailable_product():
    return Product.objects.create(
        name="Aniseed Syrup", stock_quantity=13, unavailable=True
    )


@pytest.fixture()
def open_order():
    return Order.objects.create()


@pytest.fixture()
def shipped_order():
    return Order.objects.create(shipped_on=date(2026, 1, 2))


@pytest.fixture()
def line_service():
    return OrderLineService()


@pytest.fixture()
def shipment_service():
    return ShipmentService(clock=lambda: FIXED_TODAY)
