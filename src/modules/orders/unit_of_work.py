"""Unit of work for the order rule core.

A unit of work is one database transaction scoped to a single service
call.  It hands the service the three repositories it needs and
guarantees commit-or-rollback: either every read check and every write
of the block commits together, or nothing does.

Store failures (deadlock, lock wait timeout, serialization failure,
locked SQLite file, constraint raced by a concurrent writer) surface as
``TransactionConflict`` so callers can tell them apart from business
rejections.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Optional

import structlog
from django.db import IntegrityError, OperationalError, transaction

from modules.core.exceptions import TransactionConflict
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineDjangoRepository,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import (
        IOrderLineRepository,
        IOrderRepository,
    )
    from modules.products.repositories.interfaces import IProductRepository
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)

CONFLICT_ERRORS = (OperationalError, IntegrityError)


class AbstractUnitOfWork(abc.ABC):
    orders: IOrderRepository
    products: IProductRepository
    lines: IOrderLineRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        return None

    @abc.abstractmethod
    def publish_on_commit(self, event: DomainEvent) -> None:
        """Queue *event* for publication once the unit of work commits."""


class DjangoUnitOfWork(AbstractUnitOfWork):
    """Unit of work backed by ``transaction.atomic``.

    Nested use (e.g. inside a test transaction) becomes a savepoint, as
    with any ``atomic`` block.
    """

    def __init__(self, using: Optional[str] = None) -> None:
        self._using = using
        self._atomic: Optional[transaction.Atomic] = None

    def __enter__(self) -> DjangoUnitOfWork:
        self.orders = OrderDjangoRepository()
        self.products = ProductDjangoRepository()
        self.lines = OrderLineDjangoRepository()
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        atomic, self._atomic = self._atomic, None
        try:
            # Commits when the block succeeded, rolls back otherwise.
            atomic.__exit__(exc_type, exc, tb)
        except CONFLICT_ERRORS as err:
            logger.error("unit_of_work.commit_failed", error=str(err))
            raise TransactionConflict(f"Could not commit transaction: {err}") from err

        if exc_type is not None and issubclass(exc_type, CONFLICT_ERRORS):
            logger.error("unit_of_work.conflict", error=str(exc))
            raise TransactionConflict(f"Transaction aborted: {exc}") from exc
        return None

    def publish_on_commit(self, event: DomainEvent) -> None:
        transaction.on_commit(lambda: event_bus.publish(event), using=self._using)
