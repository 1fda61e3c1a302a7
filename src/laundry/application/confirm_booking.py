"""Application service: Confirm Booking use case.

Orchestrates the lifecycle engine (pricing, loyalty, stock) and the
Order aggregate (state transition) to turn a BOOKED order into a PENDING
one.  Everything happens in one unit of work: if any material is short
the order stays BOOKED, no points are spent and no stock moves.
"""

from __future__ import annotations

from laundry.application.dto import ConfirmBookingRequest, OrderDTO, order_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.exceptions import InvalidStateError
from laundry.domain.model.history import HistoryAction
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.logging_config import get_logger

logger = get_logger("confirm_booking")


class ConfirmBookingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        request: ConfirmBookingRequest,
        actor_id: int | None = None,
    ) -> OrderDTO:
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            order = lifecycle.lock_order(order_id)
            if not order.status.requires_stock_deduction:
                raise InvalidStateError(
                    f"Only BOOKED orders can be confirmed; order "
                    f"{order.tracking_code} is {order.status.value}"
                )

            # The estimate is discarded; measured items are priced afresh
            order.replace_items(lifecycle.build_items(request.items))
            lifecycle.apply_discounts(order, request.discount_amount, request.points_used)

            # Deduct materials before the transition (raises on shortage)
            lifecycle.commit_stock(order, actor_id)

            order.record_payment(request.payment.status, request.payment.method, actor_id)
            if request.pickup_date is not None:
                order.pickup_date = request.pickup_date
            if request.internal_notes is not None:
                order.internal_notes = request.internal_notes
            order.confirm(actor_id)
            uow.orders.save(order)

            lifecycle.record(
                order,
                HistoryAction.STATUS_CHANGE,
                "Booking confirmed, laundry received",
                actor_id,
                previous_status=OrderStatus.BOOKED,
            )
            history = uow.histories.list_for_order(order_id)
            uow.commit()

        logger.info(
            "booking_confirmed",
            extra={"tracking_code": order.tracking_code,
                   "final_price": order.final_price.amount},
        )
        return order_to_dto(order, history)
