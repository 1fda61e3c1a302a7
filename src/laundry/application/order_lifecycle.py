"""The order lifecycle engine.

Shared orchestration used by the booking, confirmation, walk-in, status
and payment use cases.  It works on the repositories of one open unit of
work, so everything it does commits or rolls back together with the
calling handler.
"""

from __future__ import annotations

from decimal import Decimal

from laundry.application.dto import CustomerContact, OrderItemSpec
from laundry.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
)
from laundry.domain.model.customer import Customer
from laundry.domain.model.history import HistoryAction, OrderHistory
from laundry.domain.model.material import StockMovement
from laundry.domain.model.order import Order, OrderItem
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.model.service import Service
from laundry.domain.model.value_objects import Money, Quantity
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.domain.service.bill_of_materials import BillOfMaterialsResolver
from laundry.domain.service.loyalty import LoyaltyLedger, points_discount
from laundry.domain.service.stock_ledger import StockLedger
from laundry.logging_config import get_logger

logger = get_logger("order_lifecycle")


class OrderLifecycle:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow
        self.bom = BillOfMaterialsResolver(uow.services)
        self.ledger = StockLedger(uow.materials, uow.movements)
        self.loyalty = LoyaltyLedger()

    # --- Loading --------------------------------------------------------------

    def lock_order(self, order_id: int) -> Order:
        order = self._uow.orders.get_for_update(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def get_service(self, service_id: int) -> Service:
        service = self._uow.services.get_by_id(service_id)
        if service is None:
            raise EntityNotFoundError(f"Service #{service_id} not found")
        return service

    def lock_customer(self, customer_id: int) -> Customer:
        customer = self._uow.customers.get_for_update(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer #{customer_id} not found")
        return customer

    def find_or_create_customer(self, contact: CustomerContact) -> Customer:
        """Match by phone; create on first contact.

        A customer that was auto-created by an earlier booking takes the
        name given most recently.
        """
        customer = self._uow.customers.get_by_phone(contact.phone.strip())
        if customer is None:
            customer = Customer.register(
                contact.name, contact.phone, contact.email, contact.address
            )
            self._uow.customers.save(customer)
            return customer
        if contact.name and customer.is_auto_created and customer.name != contact.name:
            customer.name = contact.name
            self._uow.customers.save(customer)
        return customer

    # --- Pricing --------------------------------------------------------------

    def build_items(self, specs: list[OrderItemSpec]) -> list[OrderItem]:
        """Price each line with the service's current price."""
        return [
            OrderItem.for_service(
                self.get_service(spec.service_id),
                Quantity.of(spec.qty),
                spec.is_express,
                spec.notes,
            )
            for spec in specs
        ]

    def apply_discounts(
        self, order: Order, discount_amount: Decimal, points_requested: int
    ) -> int:
        """Apply a manual discount plus redeemed loyalty points.

        Returns the number of points actually spent.
        """
        discount = Money.of(discount_amount)
        spent = 0
        if points_requested > 0:
            customer = self.lock_customer(order.customer_id)
            spent = self.loyalty.spend_points(customer, points_requested)
            self._uow.customers.save(customer)
        order.apply_discount(discount, spent, points_discount(spent))
        return spent

    # --- Stock ----------------------------------------------------------------

    def commit_stock(self, order: Order, actor_id: int | None = None) -> list[StockMovement]:
        """Check and deduct every material the order's items consume."""
        required = self.bom.resolve_items(order.items)
        check = self.ledger.check_availability(required)
        if not check.sufficient:
            raise InsufficientStockError(check.shortages)
        return self.ledger.deduct_for_order(order, required, actor_id)

    # --- Transitions ----------------------------------------------------------

    def change_status(
        self,
        order: Order,
        new_status: OrderStatus,
        notes: str | None = None,
        actor_id: int | None = None,
    ) -> OrderHistory:
        """Validate and apply a status change with its side effects.

        Cancelling an order whose status holds committed stock returns
        that stock.  Reaching TAKEN credits loyalty points once.
        """
        previous = order.transition_to(new_status, actor_id)

        if new_status is OrderStatus.CANCELLED and previous.commits_stock:
            self.ledger.restore_for_order(order, actor_id)

        if new_status is OrderStatus.TAKEN and previous is not OrderStatus.TAKEN:
            customer = self.lock_customer(order.customer_id)
            self.loyalty.accrue_points(customer, order)
            self.loyalty.record_order(customer, order)
            self._uow.customers.save(customer)

        self._uow.orders.save(order)
        logger.info(
            "order_status_changed",
            extra={"tracking_code": order.tracking_code,
                   "from_status": previous.value, "to_status": new_status.value},
        )
        return self.record(
            order,
            HistoryAction.STATUS_CHANGE,
            notes or new_status.default_note,
            actor_id,
            previous_status=previous,
        )

    # --- Audit ----------------------------------------------------------------

    def record(
        self,
        order: Order,
        action: HistoryAction,
        notes: str | None,
        actor_id: int | None = None,
        previous_status: OrderStatus | None = None,
    ) -> OrderHistory:
        entry = OrderHistory(
            order_id=order.id,  # type: ignore[arg-type]
            status=order.status,
            previous_status=previous_status,
            action=action,
            notes=notes,
            created_by=actor_id,
        )
        return self._uow.histories.add(entry)
