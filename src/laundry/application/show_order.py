"""Application service: Show Order and Track Order use cases (queries)."""

from __future__ import annotations

from laundry.application.dto import OrderDTO, order_to_dto
from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.tracking_code import normalize


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            return order_to_dto(order, uow.histories.list_for_order(order_id))


class TrackOrderHandler:
    """Public lookup by tracking code. Read-only."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, tracking_code: str) -> OrderDTO:
        code = normalize(tracking_code)
        with self._uow as uow:
            order = uow.orders.get_by_tracking_code(code)
            if order is None:
                raise EntityNotFoundError(f"No order with tracking code '{code}'")
            return order_to_dto(order, uow.histories.list_for_order(order.id))  # type: ignore[arg-type]
