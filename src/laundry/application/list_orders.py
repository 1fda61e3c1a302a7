"""Application service: List Orders use case (query)."""

from __future__ import annotations

from laundry.application.dto import OrderDTO, order_to_dto
from laundry.domain.repository.order_repository import OrderFilter
from laundry.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, criteria: OrderFilter | None = None) -> list[OrderDTO]:
        with self._uow as uow:
            return [order_to_dto(o) for o in uow.orders.list(criteria or OrderFilter())]
