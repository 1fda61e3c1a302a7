"""Domain service: Bill-of-Materials resolution.

Turns a list of ``(service, quantity)`` lines into the total quantity of
each material they consume, using each service's recipe.  Read-only.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.model.order import OrderItem
from laundry.domain.model.value_objects import Quantity
from laundry.domain.repository.service_repository import ServiceRepository


class BillOfMaterialsResolver:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def resolve(self, lines: Iterable[tuple[int, Quantity]]) -> dict[int, Decimal]:
        """Return ``{material_id: total_required}`` ordered by material ID.

        A service without recipe rows contributes nothing.  An unknown
        service ID is a caller error and fails immediately.
        """
        required: dict[int, Decimal] = {}
        for service_id, qty in lines:
            service = self._service_repo.get_by_id(service_id)
            if service is None:
                raise EntityNotFoundError(f"Service #{service_id} not found")
            for row in service.recipe:
                needed = row.quantity_needed * qty.value
                required[row.material_id] = required.get(row.material_id, Decimal("0")) + needed
        return dict(sorted(required.items()))

    def resolve_items(self, items: Iterable[OrderItem]) -> dict[int, Decimal]:
        return self.resolve((item.service_id, item.qty) for item in items)
