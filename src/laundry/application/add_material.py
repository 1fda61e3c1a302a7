"""Application service: Add Material use case.

Opening stock is booked through the stock ledger so the journal starts
with an IN movement and ``stock_qty`` always matches the latest
``stock_after``.
"""

from __future__ import annotations

from decimal import Decimal

from laundry.application.dto import MaterialStockDTO, material_to_dto
from laundry.domain.exceptions import ValidationError
from laundry.domain.model.material import Material
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.stock_ledger import StockLedger


class AddMaterialHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        sku: str,
        unit: str,
        opening_stock: Decimal = Decimal("0"),
        min_stock_alert: Decimal = Decimal("100"),
        actor_id: int | None = None,
    ) -> MaterialStockDTO:
        if not name or not name.strip():
            raise ValidationError("Material name is required")
        if not sku or not sku.strip():
            raise ValidationError("Material SKU is required")
        if opening_stock < 0 or min_stock_alert < 0:
            raise ValidationError("Stock levels cannot be negative")

        with self._uow as uow:
            if uow.materials.get_by_sku(sku.strip()) is not None:
                raise ValidationError(f"Material '{sku}' already exists")

            material = Material(
                id=None,
                name=name.strip(),
                sku=sku.strip(),
                unit=unit,
                min_stock_alert=min_stock_alert,
            )
            uow.materials.save(material)
            if opening_stock > 0:
                StockLedger(uow.materials, uow.movements).add_stock(
                    material.id, opening_stock, "Opening stock", actor_id  # type: ignore[arg-type]
                )
                material = uow.materials.get_by_id(material.id)  # type: ignore[arg-type,assignment]
            uow.commit()
        return material_to_dto(material)  # type: ignore[arg-type]
