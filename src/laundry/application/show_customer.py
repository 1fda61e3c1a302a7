"""Application service: Show Customer use case (query)."""

from __future__ import annotations

from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.model.customer import Customer
from laundry.domain.repository.unit_of_work import UnitOfWork


class ShowCustomerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, phone: str) -> Customer:
        with self._uow as uow:
            customer = uow.customers.get_by_phone(phone.strip())
            if customer is None:
                raise EntityNotFoundError(f"No customer with phone '{phone}'")
            return customer
