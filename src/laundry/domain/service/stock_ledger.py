"""Domain service: Stock Ledger.

This service is the only legal way to change a material's quantity.
Every mutation locks the material row, changes ``stock_qty`` and appends
the matching StockMovement inside the caller's transaction.

Order deductions use a two-phase approach (lock-and-validate, then
mutate) so an order never leaves stock partially deducted when one of
its materials is short.  Materials are always locked in ascending ID
order to avoid lock-ordering deadlocks between concurrent orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from laundry.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from laundry.domain.model.material import (
    Material,
    StockMovement,
    StockMovementType,
    StockShortage,
)
from laundry.domain.model.order import Order
from laundry.domain.repository.material_repository import MaterialRepository
from laundry.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from laundry.logging_config import get_logger

logger = get_logger("stock_ledger")


@dataclass(frozen=True)
class StockCheck:
    sufficient: bool
    shortages: list[StockShortage] = field(default_factory=list)
    required: dict[int, Decimal] = field(default_factory=dict)


class StockLedger:

    def __init__(
        self,
        material_repo: MaterialRepository,
        movement_repo: StockMovementRepository,
    ) -> None:
        self._material_repo = material_repo
        self._movement_repo = movement_repo

    # --- Queries --------------------------------------------------------------

    def check_availability(self, required: dict[int, Decimal]) -> StockCheck:
        """Pre-flight check. Never mutates anything.

        A material that no longer exists is reported as a shortage with
        nothing available.
        """
        shortages: list[StockShortage] = []
        for material_id in sorted(required):
            needed = required[material_id]
            material = self._material_repo.get_by_id(material_id)
            if material is None:
                shortages.append(
                    StockShortage(material_id, "Unknown", needed, Decimal("0"))
                )
                continue
            shortage = material.shortage_for(needed)
            if shortage is not None:
                shortages.append(shortage)
        return StockCheck(
            sufficient=not shortages, shortages=shortages, required=dict(required)
        )

    def low_stock(self) -> list[Material]:
        """Active materials at or below their alert threshold."""
        return [
            m for m in self._material_repo.list_all()
            if m.is_active and m.is_low_stock
        ]

    def history(self, material_id: int, limit: int = 50) -> list[StockMovement]:
        self._get(material_id)
        return self._movement_repo.list_for_material(material_id, limit)

    # --- Order consumption ----------------------------------------------------

    def deduct(
        self,
        material_id: int,
        quantity: Decimal,
        order: Order,
        actor_id: int | None = None,
    ) -> StockMovement:
        """Consume stock of a single material for an order."""
        material = self._lock(material_id)
        return self._apply_deduction(material, quantity, order, actor_id)

    def deduct_for_order(
        self,
        order: Order,
        required: dict[int, Decimal],
        actor_id: int | None = None,
    ) -> list[StockMovement]:
        """Deduct every required material for an order, all or nothing.

          Phase 1, lock and validate: lock each material in ascending ID
                    order and collect every shortage.  Fails before any
                    mutation.
          Phase 2, mutate and persist: deduct each material and append
                    its OUT movement.
        """
        # Phase 1: lock all materials and validate
        locked: list[tuple[Material, Decimal]] = []
        shortages: list[StockShortage] = []
        for material_id in sorted(required):
            material = self._lock(material_id)
            quantity = required[material_id]
            shortage = material.shortage_for(quantity)
            if shortage is not None:
                shortages.append(shortage)
            locked.append((material, quantity))

        if shortages:
            logger.info(
                "stock_insufficient",
                extra={
                    "tracking_code": order.tracking_code,
                    "materials": [s.material_id for s in shortages],
                },
            )
            raise InsufficientStockError(shortages)

        # Phase 2: mutate and persist
        return [
            self._apply_deduction(material, quantity, order, actor_id)
            for material, quantity in locked
        ]

    def restore_for_order(
        self, order: Order, actor_id: int | None = None
    ) -> list[StockMovement]:
        """Return every quantity previously deducted for an order.

        Each OUT movement recorded against the order gets exactly one
        IN movement of the same quantity.  An order that never had stock
        deducted restores nothing.
        """
        outs = self._movement_repo.list_for_order(order.id, StockMovementType.OUT)  # type: ignore[arg-type]
        restored: list[StockMovement] = []
        for out in sorted(outs, key=lambda m: m.material_id):
            material = self._lock(out.material_id)
            movement = material.add(
                out.quantity,
                order_id=order.id,
                actor_id=actor_id,
                notes=f"Reversal of order {order.tracking_code} (cancelled)",
            )
            restored.append(self._persist(material, movement))
            logger.info(
                "stock_restored",
                extra={
                    "material_id": material.id,
                    "quantity": out.quantity,
                    "stock_after": movement.stock_after,
                    "tracking_code": order.tracking_code,
                },
            )
        return restored

    # --- Manual operations ----------------------------------------------------

    def add_stock(
        self,
        material_id: int,
        quantity: Decimal,
        notes: str = "",
        actor_id: int | None = None,
    ) -> StockMovement:
        """Record a delivery of new stock."""
        material = self._lock(material_id)
        movement = material.add(
            quantity, actor_id=actor_id, notes=notes or "Manual stock addition"
        )
        logger.info(
            "stock_added",
            extra={"material_id": material_id, "quantity": quantity,
                   "stock_after": movement.stock_after},
        )
        return self._persist(material, movement)

    def adjust_stock(
        self,
        material_id: int,
        new_quantity: Decimal,
        notes: str = "",
        actor_id: int | None = None,
    ) -> StockMovement:
        """Overwrite stock with a counted value (stock opname)."""
        material = self._lock(material_id)
        movement = material.adjust_to(
            new_quantity, actor_id=actor_id, notes=notes or "Stock adjustment"
        )
        logger.info(
            "stock_adjusted",
            extra={"material_id": material_id, "stock_before": movement.stock_before,
                   "stock_after": movement.stock_after},
        )
        return self._persist(material, movement)

    # --- Internal helpers -----------------------------------------------------

    def _apply_deduction(
        self,
        material: Material,
        quantity: Decimal,
        order: Order,
        actor_id: int | None,
    ) -> StockMovement:
        if order.id is None:
            raise ValidationError("Order must be saved before stock is deducted")
        movement = material.deduct(
            quantity,
            order_id=order.id,
            actor_id=actor_id,
            notes=f"Consumed by order {order.tracking_code}",
        )
        logger.info(
            "stock_deducted",
            extra={
                "material_id": material.id,
                "quantity": quantity,
                "stock_after": movement.stock_after,
                "tracking_code": order.tracking_code,
            },
        )
        return self._persist(material, movement)

    def _persist(self, material: Material, movement: StockMovement) -> StockMovement:
        self._material_repo.save(material)
        return self._movement_repo.add(movement)

    def _lock(self, material_id: int) -> Material:
        material = self._material_repo.get_for_update(material_id)
        if material is None:
            raise EntityNotFoundError(f"Material #{material_id} not found")
        return material

    def _get(self, material_id: int) -> Material:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise EntityNotFoundError(f"Material #{material_id} not found")
        return material
