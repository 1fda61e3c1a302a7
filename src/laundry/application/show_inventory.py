"""Application service: inventory queries (stock status, low stock, history)."""

from __future__ import annotations

from laundry.application.dto import (
    MaterialStockDTO,
    StockMovementDTO,
    material_to_dto,
    movement_to_dto,
)
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.stock_ledger import StockLedger


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, low_only: bool = False) -> list[MaterialStockDTO]:
        with self._uow as uow:
            if low_only:
                materials = StockLedger(uow.materials, uow.movements).low_stock()
            else:
                materials = [m for m in uow.materials.list_all() if m.is_active]
            return [material_to_dto(m) for m in materials]


class MaterialHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, material_id: int, limit: int = 50) -> list[StockMovementDTO]:
        with self._uow as uow:
            ledger = StockLedger(uow.materials, uow.movements)
            return [movement_to_dto(m) for m in ledger.history(material_id, limit)]
