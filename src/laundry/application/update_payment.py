"""Application service: Update Payment use case.

Payment is independent of the status state machine: it records the new
payment status and method and appends a PAYMENT history entry.
"""

from __future__ import annotations

from laundry.application.dto import OrderDTO, order_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.model.history import HistoryAction
from laundry.domain.model.order_status import PaymentMethod, PaymentStatus
from laundry.domain.repository.unit_of_work import UnitOfWork


class UpdatePaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        payment_status: PaymentStatus,
        method: PaymentMethod | None = None,
        actor_id: int | None = None,
    ) -> OrderDTO:
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            order = lifecycle.lock_order(order_id)

            order.record_payment(payment_status, method, actor_id)
            uow.orders.save(order)

            lifecycle.record(
                order,
                HistoryAction.PAYMENT,
                payment_status.history_note,
                actor_id,
            )
            history = uow.histories.list_for_order(order_id)
            uow.commit()

        return order_to_dto(order, history)
