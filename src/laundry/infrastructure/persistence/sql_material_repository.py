"""SQLAlchemy implementation of MaterialRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.domain.model.material import Material
from laundry.domain.repository.material_repository import MaterialRepository
from laundry.infrastructure.persistence.orm import MaterialRow


class SqlMaterialRepository(MaterialRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, material_id: int) -> Material | None:
        row = self._session.get(MaterialRow, material_id)
        return self._to_domain(row) if row else None

    def get_for_update(self, material_id: int) -> Material | None:
        # SELECT ... FOR UPDATE, re-reading the row so the quantity is current
        row = self._session.execute(
            select(MaterialRow)
            .where(MaterialRow.id == material_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_by_sku(self, sku: str) -> Material | None:
        row = self._session.execute(
            select(MaterialRow).where(MaterialRow.sku == sku)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Material]:
        rows = self._session.execute(select(MaterialRow).order_by(MaterialRow.name)).scalars()
        return [self._to_domain(r) for r in rows]

    def save(self, material: Material) -> None:
        row = self._session.get(MaterialRow, material.id) if material.id else None
        if row is None:
            row = MaterialRow()
            self._session.add(row)
        row.name = material.name
        row.sku = material.sku
        row.unit = material.unit
        row.stock_qty = material.stock_qty
        row.min_stock_alert = material.min_stock_alert
        row.is_active = material.is_active
        self._session.flush()
        material.id = row.id

    @staticmethod
    def _to_domain(row: MaterialRow) -> Material:
        return Material(
            id=row.id,
            name=row.name,
            sku=row.sku,
            unit=row.unit,
            stock_qty=row.stock_qty,
            min_stock_alert=row.min_stock_alert,
            is_active=row.is_active,
        )
