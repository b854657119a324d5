"""Django ORM implementation of the Product repository.

Error handling follows the Null Object pattern: methods return ``None``
instead of raising; the Service Layer decides how to translate a
missing record into a business error.
"""

from __future__ import annotations

from typing import Optional

import structlog

from django.core.exceptions import ValidationError

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must run inside a transaction.  Backends without row locks
        (SQLite) ignore the lock clause.
        """
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=entity.id,
            stock_quantity=entity.stock_quantity,
            ordered_quantity=entity.ordered_quantity,
        )
        return entity
