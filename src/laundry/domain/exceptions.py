"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a machine-readable ``code``; the ones a UI needs to act on
also carry structured data (allowed statuses, stock shortages).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from laundry.domain.model.order_status import OrderStatus
    from laundry.domain.model.material import StockShortage


class DomainException(Exception):
    """Base class for all domain errors."""

    code: str = "DOMAIN_ERROR"
    retryable: bool = False


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class InvalidTransitionError(DomainException):
    """The requested status is not reachable from the current one."""

    code = "INVALID_TRANSITION"

    def __init__(self, current: OrderStatus, requested: OrderStatus,
                 allowed: Iterable[OrderStatus]) -> None:
        self.current = current
        self.requested = requested
        self.allowed = tuple(allowed)
        allowed_text = ", ".join(s.value for s in self.allowed) or "none"
        super().__init__(
            f"Cannot change status from {current.value} to {requested.value}. "
            f"Allowed: {allowed_text}"
        )


class InvalidStateError(DomainException):
    """An operation was invoked while the order is in the wrong state."""

    code = "INVALID_STATE"


class ConcurrentUpdateError(InvalidStateError):
    """The order changed between the caller's read and the locked read."""

    code = "CONCURRENT_UPDATE"


class InsufficientStockError(DomainException):
    """One or more materials cannot cover the requested quantity."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, shortages: Sequence[StockShortage]) -> None:
        self.shortages = tuple(shortages)
        detail = "; ".join(
            f"{s.material_name} (need {s.required}, have {s.available}, "
            f"short {s.shortfall})"
            for s in self.shortages
        )
        super().__init__(f"Insufficient stock: {detail}")


class LockTimeoutError(DomainException):
    """A row lock could not be acquired in time. Safe to retry the request."""

    code = "LOCK_TIMEOUT"
    retryable = True
