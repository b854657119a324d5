"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the record managed by the
    repository (e.g. ``Order``, ``Product``).  A missing record is
    always reported as ``None``, never as a zero-valued entity.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve a record by its primary key."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[T]:
        """Retrieve a record and lock its row for the ambient transaction."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) a record."""
