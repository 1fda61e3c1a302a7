"""Application service: Delete Order use case.

Orders are soft-deleted so their history and stock movements stay
intact.  Only orders that hold no committed stock may be deleted; cancel
first to return materials.
"""

from __future__ import annotations

from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.exceptions import InvalidStateError
from laundry.domain.model.history import HistoryAction
from laundry.domain.repository.unit_of_work import UnitOfWork


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, actor_id: int | None = None) -> None:
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            order = lifecycle.lock_order(order_id)
            if order.status.commits_stock:
                raise InvalidStateError(
                    f"Order {order.tracking_code} is {order.status.value} and holds "
                    f"materials; cancel it before deleting"
                )
            order.soft_delete()
            order.updated_by = actor_id
            lifecycle.record(
                order, HistoryAction.UPDATED, "Order deleted", actor_id,
            )
            uow.orders.save(order)
            uow.commit()
