"""Application service: Update Service Price use case."""

from __future__ import annotations

from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.unit_of_work import UnitOfWork


class UpdateServicePriceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, service_id: int, new_price: str) -> None:
        """Update a service's price.

        This does NOT affect any existing orders; their items captured a
        price snapshot when they were created.
        """
        with self._uow as uow:
            service = uow.services.get_by_id(service_id)
            if service is None:
                raise EntityNotFoundError(f"Service #{service_id} not found")

            service.update_price(Money.of(new_price))
            uow.services.save(service)
            uow.commit()
