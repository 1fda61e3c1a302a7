"""Application service: Create Walk-in Order use case.

An order taken at the counter with measured quantities.  It follows the
same pricing and stock path as a booking confirmation but starts in
PENDING with no BOOKED record.
"""

from __future__ import annotations

from laundry.application.dto import OrderDTO, WalkInOrderRequest, order_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.model.history import HistoryAction
from laundry.domain.model.order import Order
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.tracking_code import generate_tracking_code
from laundry.logging_config import get_logger

logger = get_logger("create_walk_in_order")


class CreateWalkInOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, request: WalkInOrderRequest, actor_id: int | None = None) -> OrderDTO:
        """Create a PENDING order and consume its materials.

        Steps:
        1. Match or create the customer by phone.
        2. Build items with *current* service prices (snapshot).
        3. Apply the manual discount and redeemed points.
        4. Persist, then check and deduct stock for every material.
        """
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            customer = lifecycle.find_or_create_customer(request.contact)

            order = Order.walk_in(
                tracking_code=generate_tracking_code(uow.orders.tracking_code_exists),
                customer_id=customer.id,  # type: ignore[arg-type]
                items=lifecycle.build_items(request.items),
                pickup_date=request.pickup_date,
                customer_notes=request.notes,
                internal_notes=request.internal_notes,
                actor_id=actor_id,
            )
            lifecycle.apply_discounts(order, request.discount_amount, request.points_used)
            order.record_payment(request.payment.status, request.payment.method, actor_id)
            uow.orders.save(order)

            lifecycle.commit_stock(order, actor_id)

            entry = lifecycle.record(
                order, HistoryAction.CREATED, "Walk-in order created, laundry received",
                actor_id,
            )
            uow.commit()

        logger.info(
            "walk_in_order_created",
            extra={"tracking_code": order.tracking_code,
                   "final_price": order.final_price.amount},
        )
        return order_to_dto(order, [entry])
