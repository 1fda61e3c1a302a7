"""Customer aggregate with its embedded loyalty counters.

``total_points``, ``total_orders`` and ``total_spent`` are denormalised
aggregates maintained incrementally by the loyalty ledger.  They can be
recomputed from orders by the reconciliation use case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from laundry.domain.exceptions import ValidationError
from laundry.domain.model.value_objects import Money

AUTO_CREATED_NOTE = "Auto-created from booking"


@dataclass
class Customer:
    id: int | None
    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    total_points: int = 0
    total_orders: int = 0
    total_spent: Money = field(default_factory=Money.zero)
    last_order_date: datetime | None = None

    @staticmethod
    def register(
        name: str,
        phone: str,
        email: str | None = None,
        address: str | None = None,
    ) -> Customer:
        """Create a customer on first contact (booking or walk-in)."""
        phone = (phone or "").strip()
        if not phone:
            raise ValidationError("Customer phone is required")
        return Customer(
            id=None,
            name=(name or "").strip() or "Customer",
            phone=phone,
            email=email,
            address=address,
            notes=AUTO_CREATED_NOTE,
        )

    @property
    def is_auto_created(self) -> bool:
        return self.notes == AUTO_CREATED_NOTE

    def add_points(self, points: int) -> None:
        if points < 0:
            raise ValidationError("Cannot add a negative number of points")
        self.total_points += points

    def deduct_points(self, points: int) -> None:
        if points < 0:
            raise ValidationError("Cannot deduct a negative number of points")
        if points > self.total_points:
            raise ValidationError(
                f"Customer has {self.total_points} points, cannot deduct {points}"
            )
        self.total_points -= points

    def record_order(self, amount: Money, at: datetime | None = None) -> None:
        """Count a finished order towards the lifetime totals."""
        self.total_orders += 1
        self.total_spent = self.total_spent + amount
        self.last_order_date = at or datetime.now(timezone.utc)
