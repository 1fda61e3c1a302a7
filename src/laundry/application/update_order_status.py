"""Application service: Update Order Status use case.

Validates the transition against the status table, then applies its side
effects in the same unit of work: cancelling an order that holds
committed stock restores that stock, picking up an order credits loyalty
points.
"""

from __future__ import annotations

from laundry.application.dto import OrderDTO, order_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        new_status: OrderStatus,
        notes: str | None = None,
        actor_id: int | None = None,
        expected_status: OrderStatus | None = None,
    ) -> OrderDTO:
        """Move an order to ``new_status``.

        Args:
            order_id: The order to update.
            new_status: Target status; must be allowed from the current one.
            notes: History note. Defaults to the canonical note of the status.
            actor_id: Acting user, recorded in history and stock movements.
            expected_status: The status the caller last saw.  If the order
                moved on in the meantime the update is rejected.
        """
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            order = lifecycle.lock_order(order_id)
            order.ensure_status(expected_status)

            lifecycle.change_status(order, new_status, notes, actor_id)

            history = uow.histories.list_for_order(order_id)
            uow.commit()

        return order_to_dto(order, history)
