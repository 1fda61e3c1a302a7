"""SQLAlchemy implementation of the append-only stock movement journal."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.domain.model.material import StockMovement, StockMovementType
from laundry.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from laundry.infrastructure.persistence.orm import StockMovementRow


class SqlStockMovementRepository(StockMovementRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, movement: StockMovement) -> StockMovement:
        row = StockMovementRow(
            material_id=movement.material_id,
            type=movement.type.value,
            quantity=movement.quantity,
            stock_before=movement.stock_before,
            stock_after=movement.stock_after,
            order_id=movement.order_id,
            notes=movement.notes,
            created_by=movement.created_by,
            created_at=movement.created_at,
        )
        self._session.add(row)
        self._session.flush()
        return replace(movement, id=row.id)

    def list_for_order(
        self, order_id: int, movement_type: StockMovementType | None = None
    ) -> list[StockMovement]:
        stmt = select(StockMovementRow).where(StockMovementRow.order_id == order_id)
        if movement_type is not None:
            stmt = stmt.where(StockMovementRow.type == movement_type.value)
        rows = self._session.execute(stmt.order_by(StockMovementRow.id)).scalars()
        return [self._to_domain(r) for r in rows]

    def list_for_material(self, material_id: int, limit: int = 50) -> list[StockMovement]:
        rows = self._session.execute(
            select(StockMovementRow)
            .where(StockMovementRow.material_id == material_id)
            .order_by(StockMovementRow.id.desc())
            .limit(limit)
        ).scalars()
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: StockMovementRow) -> StockMovement:
        return StockMovement(
            id=row.id,
            material_id=row.material_id,
            type=StockMovementType(row.type),
            quantity=row.quantity,
            stock_before=row.stock_before,
            stock_after=row.stock_after,
            order_id=row.order_id,
            notes=row.notes,
            created_by=row.created_by,
            created_at=row.created_at,
        )
