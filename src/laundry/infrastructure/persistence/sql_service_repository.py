"""SQLAlchemy implementation of ServiceRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.domain.model.service import Service, ServiceMaterial, UnitType
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.service_repository import ServiceRepository
from laundry.infrastructure.persistence.orm import ServiceMaterialRow, ServiceRow


class SqlServiceRepository(ServiceRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, service_id: int) -> Service | None:
        row = self._session.get(ServiceRow, service_id)
        return self._to_domain(row) if row else None

    def get_by_code(self, code: str) -> Service | None:
        row = self._session.execute(
            select(ServiceRow).where(ServiceRow.code == code)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Service]:
        rows = self._session.execute(select(ServiceRow).order_by(ServiceRow.code)).scalars()
        return [self._to_domain(r) for r in rows]

    def save(self, service: Service) -> None:
        row = self._session.get(ServiceRow, service.id) if service.id else None
        if row is None:
            row = ServiceRow()
            self._session.add(row)
        self._to_row(service, row)
        self._session.flush()
        service.id = row.id

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(service: Service, row: ServiceRow) -> None:
        row.code = service.code
        row.name = service.name
        row.price = service.price.amount
        row.unit_type = service.unit_type.value
        row.is_express_available = service.is_express_available
        row.express_multiplier = service.express_multiplier
        row.is_active = service.is_active

        existing = {r.material_id: r for r in row.recipe}
        wanted = {line.material_id: line for line in service.recipe}
        for material_id, recipe_row in existing.items():
            if material_id not in wanted:
                row.recipe.remove(recipe_row)
        for material_id, line in wanted.items():
            if material_id in existing:
                existing[material_id].quantity_needed = line.quantity_needed
            else:
                row.recipe.append(
                    ServiceMaterialRow(
                        material_id=material_id, quantity_needed=line.quantity_needed
                    )
                )

    @staticmethod
    def _to_domain(row: ServiceRow) -> Service:
        return Service(
            id=row.id,
            code=row.code,
            name=row.name,
            price=Money(row.price),
            unit_type=UnitType(row.unit_type),
            is_express_available=row.is_express_available,
            express_multiplier=row.express_multiplier,
            is_active=row.is_active,
            recipe=[
                ServiceMaterial(material_id=r.material_id, quantity_needed=r.quantity_needed)
                for r in sorted(row.recipe, key=lambda r: r.material_id)
            ],
        )
