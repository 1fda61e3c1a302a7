"""Application service: Create Booking use case.

A public self-service booking.  The customer is matched or created by
phone, the price is estimated from the service's price formula, and the
order is created in BOOKED.  No stock is touched: a booking records
intent, the confirmation commits materials.
"""

from __future__ import annotations

from laundry.application.dto import BookingRequest, OrderDTO, order_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.model.history import HistoryAction
from laundry.domain.model.order import Order, OrderItem
from laundry.domain.model.value_objects import Quantity
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.tracking_code import generate_public_code
from laundry.logging_config import get_logger

logger = get_logger("create_booking")


class CreateBookingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, request: BookingRequest, actor_id: int | None = None) -> OrderDTO:
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            customer = lifecycle.find_or_create_customer(request.contact)
            service = lifecycle.get_service(request.service_id)

            estimate = OrderItem.for_service(
                service,
                Quantity.of(request.estimated_qty),
                request.is_express,
                request.item_notes,
            )
            order = Order.book(
                tracking_code=generate_public_code(uow.orders.tracking_code_exists),
                customer_id=customer.id,  # type: ignore[arg-type]
                item=estimate,
                pickup_date=request.pickup_date,
                customer_notes=request.notes,
                actor_id=actor_id,
            )
            uow.orders.save(order)

            entry = lifecycle.record(
                order, HistoryAction.CREATED, "Booking created via public form", actor_id
            )
            uow.commit()

        logger.info(
            "booking_created",
            extra={"tracking_code": order.tracking_code,
                   "estimated_price": order.final_price.amount},
        )
        return order_to_dto(order, [entry])
