"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; material stock and loyalty
points are other aggregates and are coordinated by the lifecycle engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from laundry.domain.exceptions import (
    ConcurrentUpdateError,
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)
from laundry.domain.model.order_status import OrderStatus, PaymentMethod, PaymentStatus
from laundry.domain.model.service import Service
from laundry.domain.model.value_objects import Money, Quantity
from laundry.domain.service.pricing import calculate_final_price, calculate_price


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a service at order time.

    Later catalog price changes never touch ``price_at_moment`` or
    ``subtotal`` (price lock).
    """

    service_id: int
    service_name: str
    qty: Quantity
    price_at_moment: Money
    subtotal: Money
    is_express: bool = False
    express_multiplier: Decimal = Decimal("1.00")
    notes: str | None = None

    @staticmethod
    def for_service(
        service: Service,
        qty: Quantity,
        is_express: bool = False,
        notes: str | None = None,
    ) -> OrderItem:
        if not service.is_active:
            raise ValidationError(f"Service '{service.name}' is not active")
        return OrderItem(
            service_id=service.id,  # type: ignore[arg-type]
            service_name=service.name,
            qty=qty,
            price_at_moment=service.price,
            subtotal=calculate_price(service, qty, is_express),
            is_express=is_express and service.is_express_available,
            express_multiplier=service.express_multiplier,
            notes=notes,
        )


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for laundry orders.

    Use the ``Order.book()`` / ``Order.walk_in()`` factories for new
    orders.  The ``__init__`` is intentionally simple so the repository
    can reconstitute persisted orders without re-validating.
    """

    id: int | None
    tracking_code: str
    customer_id: int
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.BOOKED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_method: PaymentMethod | None = None
    discount_amount: Money = field(default_factory=Money.zero)
    points_earned: int = 0
    points_used: int = 0
    pickup_date: datetime | None = None
    customer_notes: str | None = None
    internal_notes: str | None = None
    created_by: int | None = None
    updated_by: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: datetime | None = None

    # --- Factories (used for NEW orders only) ---------------------------------

    @staticmethod
    def book(
        tracking_code: str,
        customer_id: int,
        item: OrderItem,
        pickup_date: datetime | None = None,
        customer_notes: str | None = None,
        actor_id: int | None = None,
    ) -> Order:
        """A public booking: one estimated item, no stock committed."""
        return Order(
            id=None,
            tracking_code=tracking_code,
            customer_id=customer_id,
            items=[item],
            status=OrderStatus.BOOKED,
            pickup_date=pickup_date,
            customer_notes=customer_notes,
            created_by=actor_id,
        )

    @staticmethod
    def walk_in(
        tracking_code: str,
        customer_id: int,
        items: list[OrderItem],
        pickup_date: datetime | None = None,
        customer_notes: str | None = None,
        internal_notes: str | None = None,
        actor_id: int | None = None,
    ) -> Order:
        """An order taken at the counter with final quantities."""
        _validate_items(items)
        return Order(
            id=None,
            tracking_code=tracking_code,
            customer_id=customer_id,
            items=list(items),
            status=OrderStatus.PENDING,
            pickup_date=pickup_date,
            customer_notes=customer_notes,
            internal_notes=internal_notes,
            created_by=actor_id,
            updated_by=actor_id,
        )

    # --- Mutations ------------------------------------------------------------

    def replace_items(self, items: list[OrderItem]) -> None:
        """Swap the estimated items for the finalised list."""
        self._require_status(OrderStatus.BOOKED, "replace items of")
        _validate_items(items)
        self.items = list(items)

    def apply_discount(self, discount: Money, points_used: int = 0,
                       points_discount: Money | None = None) -> None:
        """Set the manual discount plus the value of redeemed points."""
        if points_used < 0:
            raise ValidationError("Points used cannot be negative")
        self.points_used = points_used
        self.discount_amount = discount + (points_discount or Money.zero())

    def record_payment(self, status: PaymentStatus,
                       method: PaymentMethod | None = None,
                       actor_id: int | None = None) -> None:
        self.payment_status = status
        if method is not None:
            self.payment_method = method
        self.updated_by = actor_id

    def confirm(self, actor_id: int | None = None) -> None:
        """Transition BOOKED -> PENDING.

        Stock deduction must happen *before* calling this (coordinated by
        the lifecycle engine via the stock ledger).
        """
        self._require_status(OrderStatus.BOOKED, "confirm")
        self.transition_to(OrderStatus.PENDING, actor_id)

    def transition_to(self, new_status: OrderStatus,
                      actor_id: int | None = None) -> OrderStatus:
        """Move to ``new_status`` and return the previous status."""
        if not self.status.can_transition_to(new_status):
            raise InvalidTransitionError(
                self.status, new_status, self.status.allowed_transitions
            )
        previous = self.status
        self.status = new_status
        self.updated_by = actor_id
        return previous

    def ensure_status(self, expected: OrderStatus | None) -> None:
        """Reject if the status no longer matches what the caller last saw."""
        if expected is not None and self.status is not expected:
            raise ConcurrentUpdateError(
                f"Order {self.tracking_code} is {self.status.value}, "
                f"expected {expected.value}; reload and retry"
            )

    def soft_delete(self, at: datetime | None = None) -> None:
        if self.deleted_at is not None:
            raise InvalidStateError(f"Order {self.tracking_code} is already deleted")
        self.deleted_at = at or datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def total_price(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def final_price(self) -> Money:
        return calculate_final_price(self.total_price, self.discount_amount)

    # --- Internal helpers -----------------------------------------------------

    def _require_status(self, expected: OrderStatus, action: str) -> None:
        if self.status is not expected:
            raise InvalidStateError(
                f"Cannot {action} order: current status is {self.status.value}, "
                f"expected {expected.value}"
            )


def _validate_items(items: list[OrderItem]) -> None:
    if not items:
        raise ValidationError("Order must contain at least one item")
    if len(items) > MAX_LINE_ITEMS:
        raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
