"""Application service: Adjust Stock use case.

Sets a material's stock to a physically counted value.  The movement
records the size of the correction and the true resulting stock.
"""

from __future__ import annotations

from decimal import Decimal

from laundry.application.dto import StockMovementDTO, movement_to_dto
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.stock_ledger import StockLedger


class AdjustStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        material_id: int,
        new_quantity: Decimal,
        notes: str = "",
        actor_id: int | None = None,
    ) -> StockMovementDTO:
        """Set the total stock quantity for a material."""
        with self._uow as uow:
            ledger = StockLedger(uow.materials, uow.movements)
            movement = ledger.adjust_stock(material_id, new_quantity, notes, actor_id)
            uow.commit()
        return movement_to_dto(movement)
