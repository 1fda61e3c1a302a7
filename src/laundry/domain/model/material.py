"""Material aggregate and its append-only stock movement journal.

A Material is a consumable (detergent, softener, plastic bags) whose
``stock_qty`` may only change through one of the mutators below.  Each
mutator returns the StockMovement describing the change so the caller
persists both in the same transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from laundry.domain.exceptions import InsufficientStockError, ValidationError

ZERO = Decimal("0")


class StockMovementType(Enum):
    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"
    RETURN = "RETURN"


@dataclass(frozen=True)
class StockMovement:
    """A single change to a material's quantity, with before/after snapshots.

    ``quantity`` is always a non-negative magnitude; ``type`` carries the
    direction.
    """

    material_id: int
    type: StockMovementType
    quantity: Decimal
    stock_before: Decimal
    stock_after: Decimal
    order_id: int | None = None
    notes: str | None = None
    created_by: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    @property
    def signed_quantity(self) -> Decimal:
        return self.stock_after - self.stock_before


@dataclass(frozen=True)
class StockShortage:
    material_id: int
    material_name: str
    required: Decimal
    available: Decimal

    @property
    def shortfall(self) -> Decimal:
        return self.required - self.available


@dataclass
class Material:
    """Aggregate root for a consumable.

    Invariants:
    - ``stock_qty`` never goes negative through ``deduct``
    - ``adjust_to`` may set any non-negative value
    """

    id: int | None
    name: str
    sku: str
    unit: str
    stock_qty: Decimal = ZERO
    min_stock_alert: Decimal = Decimal("100")
    is_active: bool = True

    @property
    def is_low_stock(self) -> bool:
        return self.stock_qty <= self.min_stock_alert

    def has_enough_stock(self, quantity: Decimal) -> bool:
        return self.stock_qty >= quantity

    def shortage_for(self, required: Decimal) -> StockShortage | None:
        if self.has_enough_stock(required):
            return None
        return StockShortage(
            material_id=self.id,  # type: ignore[arg-type]
            material_name=self.name,
            required=required,
            available=self.stock_qty,
        )

    def deduct(
        self,
        quantity: Decimal,
        *,
        order_id: int | None = None,
        actor_id: int | None = None,
        notes: str | None = None,
    ) -> StockMovement:
        """Consume stock. Raises InsufficientStockError if not enough."""
        self._require_positive(quantity)
        shortage = self.shortage_for(quantity)
        if shortage is not None:
            raise InsufficientStockError([shortage])
        return self._move(StockMovementType.OUT, quantity, self.stock_qty - quantity,
                          order_id, actor_id, notes)

    def add(
        self,
        quantity: Decimal,
        *,
        movement_type: StockMovementType = StockMovementType.IN,
        order_id: int | None = None,
        actor_id: int | None = None,
        notes: str | None = None,
    ) -> StockMovement:
        """Receive stock (restock, or a reversal of an order's consumption)."""
        self._require_positive(quantity)
        return self._move(movement_type, quantity, self.stock_qty + quantity,
                          order_id, actor_id, notes)

    def adjust_to(
        self,
        new_quantity: Decimal,
        *,
        actor_id: int | None = None,
        notes: str | None = None,
    ) -> StockMovement:
        """Set the stock to an absolute counted value."""
        if new_quantity < ZERO:
            raise ValidationError("Stock cannot be adjusted below zero")
        delta = abs(new_quantity - self.stock_qty)
        return self._move(StockMovementType.ADJUSTMENT, delta, new_quantity,
                          None, actor_id, notes)

    # --- Internal helpers -----------------------------------------------------

    def _move(
        self,
        movement_type: StockMovementType,
        quantity: Decimal,
        stock_after: Decimal,
        order_id: int | None,
        actor_id: int | None,
        notes: str | None,
    ) -> StockMovement:
        movement = StockMovement(
            material_id=self.id,  # type: ignore[arg-type]
            type=movement_type,
            quantity=quantity,
            stock_before=self.stock_qty,
            stock_after=stock_after,
            order_id=order_id,
            notes=notes,
            created_by=actor_id,
        )
        self.stock_qty = stock_after
        return movement

    @staticmethod
    def _require_positive(quantity: Decimal) -> None:
        if quantity <= ZERO:
            raise ValidationError("Stock quantity must be positive")
