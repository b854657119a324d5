"""Unit tests for the order services with an in-memory unit of work.

The fake records whether the unit of work committed or rolled back and
which records were saved, so the tests can assert that rejected calls
never write anything.
"""

from __future__ import annotations

from datetime import date

import pytest

from modules.core.exceptions import TransactionConflict
from modules.orders.events import OrderLineAdded, OrderShipped
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    OrderAlreadyShipped,
    OrderNotFound,
    ProductNotFound,
    ProductUnavailable,
)
from modules.orders.models import Order
from modules.orders.services import OrderLineService, ShipmentService
from modules.orders.unit_of_work import AbstractUnitOfWork
from modules.products.models import Product

pytestmark = pytest.mark.unit

TODAY = date(2026, 10, 19)


class FakeRepository:
    def __init__(self, records=()):
        self._records = {record.id: record for record in records}
        self.saved = []

    def get_by_id(self, id):
        return self._records.get(id)

    def get_for_update(self, id):
        return self._records.get(id)

    def save(self, entity):
        if entity.id is None:
            entity.id = max(self._records, default=0) + 1
        self._records[entity.id] = entity
        self.saved.append(entity)
        return entity

    def list_for_order(self, order_id):
        return [r for r in self._records.values() if r.order_id == order_id]


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, orders=(), products=(), lines=(), fail_commit=False):
        self.orders = FakeRepository(orders)
        self.products = FakeRepository(products)
        self.lines = FakeRepository(lines)
        self.fail_commit = fail_commit
        self.committed = False
        self.rolled_back = False
        self.published = []
        self._pending = []

    def __enter__(self):
        self._pending = []
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.rolled_back = True
            return None
        if self.fail_commit:
            self.rolled_back = True
            raise TransactionConflict("simulated write conflict")
        self.committed = True
        self.published.extend(self._pending)
        return None

    def publish_on_commit(self, event):
        self._pending.append(event)

    @property
    def writes(self):
        return self.orders.saved + self.products.saved + self.lines.saved


def _product(id=7, stock=20, ordered=0, unavailable=False):
    return Product(
        id=id,
        name=f"Product {id}",
        stock_quantity=stock,
        ordered_quantity=ordered,
        unavailable=unavailable,
    )


def _order(id=1, shipped_on=None):
    return Order(id=id, shipped_on=shipped_on)


def _line_service(uow):
    return OrderLineService(uow_factory=lambda: uow)


def _shipment_service(uow):
    return ShipmentService(uow_factory=lambda: uow, clock=lambda: TODAY)


# ===========================================================================
# OrderLineService.add_line
# ===========================================================================


class TestAddLine:
    def test_success_saves_product_then_line(self):
        product = _product(stock=20, ordered=4)
        uow = FakeUnitOfWork(orders=[_order()], products=[product])

        line = _line_service(uow).add_line(1, 7, 16)

        assert uow.committed
        assert uow.products.saved == [product]
        assert uow.lines.saved == [line]
        assert product.ordered_quantity == 20
        assert line.quantity == 16
        assert line.order_id == 1
        assert line.product_id == 7
        assert uow.orders.saved == []

    def test_success_publishes_event_on_commit(self):
        uow = FakeUnitOfWork(orders=[_order()], products=[_product()])

        line = _line_service(uow).add_line(1, 7, 2)

        assert uow.published == [
            OrderLineAdded(
                aggregate_id=1,
                line_id=line.id,
                product_id=7,
                quantity=2,
                event_id=uow.published[0].event_id,
                occurred_on=uow.published[0].occurred_on,
            )
        ]

    @pytest.mark.parametrize(
        "uow_kwargs, args, expected",
        [
            ({"products": [_product()]}, (1, 7, 1), OrderNotFound),
            ({"orders": [_order()]}, (1, 7, 1), ProductNotFound),
            (
                {"orders": [_order(shipped_on=TODAY)], "products": [_product()]},
                (1, 7, 1),
                OrderAlreadyShipped,
            ),
            (
                {"orders": [_order()], "products": [_product(unavailable=True)]},
                (1, 7, 1),
                ProductUnavailable,
            ),
            (
                {"orders": [_order()], "products": [_product(stock=5)]},
                (1, 7, 6),
                InsufficientStock,
            ),
        ],
    )
    def test_rejections_write_nothing(self, uow_kwargs, args, expected):
        uow = FakeUnitOfWork(**uow_kwargs)

        with pytest.raises(expected):
            _line_service(uow).add_line(*args)

        assert uow.rolled_back
        assert not uow.committed
        assert uow.writes == []
        assert uow.published == []

    def test_invalid_quantity_never_opens_unit_of_work(self):
        opened = []

        def factory():
            opened.append(1)
            return FakeUnitOfWork()

        with pytest.raises(InvalidQuantity):
            OrderLineService(uow_factory=factory).add_line(1, 7, 0)

        assert opened == []

    def test_commit_conflict_propagates_without_events(self):
        uow = FakeUnitOfWork(
            orders=[_order()], products=[_product()], fail_commit=True
        )

        with pytest.raises(TransactionConflict):
            _line_service(uow).add_line(1, 7, 1)

        assert uow.published == []


# ===========================================================================
# ShipmentService.ship_order
# ===========================================================================


class TestShipOrder:
    def test_success(self):
        order = _order()
        uow = FakeUnitOfWork(orders=[order])

        result = _shipment_service(uow).ship_order(1)

        assert result is order
        assert order.shipped_on == TODAY
        assert uow.committed
        assert uow.orders.saved == [order]
        assert [type(e) for e in uow.published] == [OrderShipped]
        assert uow.published[0].shipped_on == TODAY

    def test_unknown_order(self):
        uow = FakeUnitOfWork()

        with pytest.raises(OrderNotFound):
            _shipment_service(uow).ship_order(1)

        assert uow.writes == []

    def test_already_shipped(self):
        order = _order(shipped_on=date(2026, 1, 2))
        uow = FakeUnitOfWork(orders=[order])

        with pytest.raises(OrderAlreadyShipped):
            _shipment_service(uow).ship_order(1)

        assert order.shipped_on == date(2026, 1, 2)
        assert uow.writes == []
        assert uow.published == []
