"""Order status state machine and the payment enums.

The transition table below is the only definition of which status may
follow which.  ``commits_stock`` is derived from the same enum so the
cancellation path and the table cannot drift apart.
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(Enum):
    BOOKED = "BOOKED"
    PENDING = "PENDING"
    WASHING = "WASHING"
    DRYING = "DRYING"
    IRONING = "IRONING"
    COMPLETED = "COMPLETED"
    READY = "READY"
    TAKEN = "TAKEN"
    CANCELLED = "CANCELLED"

    @property
    def allowed_transitions(self) -> tuple[OrderStatus, ...]:
        return _TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]

    @property
    def is_final(self) -> bool:
        return not _TRANSITIONS[self]

    @property
    def commits_stock(self) -> bool:
        """True while the order holds materials that a cancellation returns."""
        return self in _STOCK_COMMITTED

    @property
    def requires_stock_deduction(self) -> bool:
        """True only for a booking, whose confirmation deducts materials."""
        return self is OrderStatus.BOOKED

    @property
    def default_note(self) -> str:
        return _DEFAULT_NOTES[self]


_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.BOOKED: (OrderStatus.PENDING, OrderStatus.WASHING, OrderStatus.CANCELLED),
    OrderStatus.PENDING: (OrderStatus.WASHING, OrderStatus.CANCELLED),
    OrderStatus.WASHING: (
        OrderStatus.DRYING,
        OrderStatus.IRONING,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.DRYING: (
        OrderStatus.IRONING,
        OrderStatus.COMPLETED,
        OrderStatus.READY,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.IRONING: (OrderStatus.COMPLETED, OrderStatus.READY, OrderStatus.CANCELLED),
    OrderStatus.COMPLETED: (OrderStatus.READY, OrderStatus.TAKEN, OrderStatus.CANCELLED),
    OrderStatus.READY: (OrderStatus.TAKEN, OrderStatus.CANCELLED),
    OrderStatus.TAKEN: (),
    OrderStatus.CANCELLED: (),
}

_STOCK_COMMITTED = frozenset(
    {OrderStatus.PENDING, OrderStatus.WASHING, OrderStatus.DRYING, OrderStatus.IRONING}
)

_DEFAULT_NOTES: dict[OrderStatus, str] = {
    OrderStatus.BOOKED: "Booking created",
    OrderStatus.PENDING: "Laundry received",
    OrderStatus.WASHING: "Laundry is being washed",
    OrderStatus.DRYING: "Laundry is being dried",
    OrderStatus.IRONING: "Laundry is being ironed",
    OrderStatus.COMPLETED: "Laundry finished",
    OrderStatus.READY: "Laundry ready for pickup",
    OrderStatus.TAKEN: "Laundry picked up",
    OrderStatus.CANCELLED: "Order cancelled",
}


class PaymentStatus(Enum):
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"

    @property
    def history_note(self) -> str:
        return {
            PaymentStatus.PAID: "Paid in full",
            PaymentStatus.PARTIAL: "Partially paid",
            PaymentStatus.UNPAID: "Payment status set to unpaid",
        }[self]


class PaymentMethod(Enum):
    CASH = "CASH"
    TRANSFER = "TRANSFER"
    QRIS = "QRIS"
    OTHER = "OTHER"
