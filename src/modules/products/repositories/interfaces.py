"""Product repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product record.

    ``get_for_update`` is used by the order-line service so that the
    stock check and the ordered-quantity increment see the same row.
    """
