"""Application service: Add Stock use case (restock delivery)."""

from __future__ import annotations

from decimal import Decimal

from laundry.application.dto import StockMovementDTO, movement_to_dto
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.stock_ledger import StockLedger


class AddStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        material_id: int,
        quantity: Decimal,
        notes: str = "",
        actor_id: int | None = None,
    ) -> StockMovementDTO:
        with self._uow as uow:
            ledger = StockLedger(uow.materials, uow.movements)
            movement = ledger.add_stock(material_id, quantity, notes, actor_id)
            uow.commit()
        return movement_to_dto(movement)
