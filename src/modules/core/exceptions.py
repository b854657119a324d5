"""Error taxonomy shared by every module.

Two families:

- ``BusinessRuleViolation``: an expected business outcome.  Retrying only
  makes sense after re-reading fresh state.
- ``InfrastructureError``: the store could not complete the unit of work.
  The caller may retry the whole operation.

Concrete exceptions live in each module's ``exceptions.py``.
"""

from __future__ import annotations


class BusinessRuleViolation(Exception):
    """Base class for rejections caused by business rules."""


class NotFound(BusinessRuleViolation):
    """A referenced record key does not resolve to an existing record."""


class InvalidInput(BusinessRuleViolation):
    """Input rejected before any record is read."""


class InvalidState(BusinessRuleViolation):
    """The current state of a record forbids the operation."""


class InsufficientStock(BusinessRuleViolation):
    """Requested quantity exceeds the stock on hand."""


class InfrastructureError(Exception):
    """Base class for failures of the underlying store."""


class TransactionConflict(InfrastructureError):
    """The unit of work could not be committed (lock, deadlock, serialization)."""
