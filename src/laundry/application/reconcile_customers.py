"""Application service: Reconcile Customer Aggregates use case.

``total_orders``, ``total_spent`` and ``total_points`` on the customer are
maintained incrementally.  This use case recomputes them from the orders
and reports every customer whose counters drifted; with ``fix=True`` it
rewrites the counters.

Recomputed values:
- total_orders: picked-up (TAKEN) orders
- total_spent:  sum of their final prices
- total_points: points earned minus points redeemed over all orders

Soft-deleted orders count: deleting a picked-up order does not take back
what the customer earned and spent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from laundry.domain.model.customer import Customer
from laundry.domain.model.order import Order
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.logging_config import get_logger

logger = get_logger("reconcile_customers")


@dataclass(frozen=True)
class CustomerDrift:
    customer_id: int
    phone: str
    recorded_orders: int
    expected_orders: int
    recorded_spent: Decimal
    expected_spent: Decimal
    recorded_points: int
    expected_points: int


def expected_aggregates(orders: list[Order]) -> tuple[int, Money, int]:
    taken = [o for o in orders if o.status is OrderStatus.TAKEN]
    spent = Money.zero()
    for order in taken:
        spent = spent + order.final_price
    points = sum(o.points_earned for o in orders) - sum(o.points_used for o in orders)
    return len(taken), spent, points


class ReconcileCustomersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, fix: bool = False) -> list[CustomerDrift]:
        drifts: list[CustomerDrift] = []
        with self._uow as uow:
            for customer in uow.customers.list_all():
                orders = uow.orders.list_for_customer(customer.id, include_deleted=True)  # type: ignore[arg-type]
                drift = self._check(customer, orders)
                if drift is None:
                    continue
                drifts.append(drift)
                logger.warning(
                    "customer_aggregate_drift",
                    extra={"customer_id": customer.id, "fixed": fix},
                )
                if fix:
                    locked = uow.customers.get_for_update(customer.id)  # type: ignore[arg-type]
                    locked.total_orders = drift.expected_orders  # type: ignore[union-attr]
                    locked.total_spent = Money(drift.expected_spent)  # type: ignore[union-attr]
                    locked.total_points = drift.expected_points  # type: ignore[union-attr]
                    uow.customers.save(locked)  # type: ignore[arg-type]
            uow.commit()
        return drifts

    @staticmethod
    def _check(customer: Customer, orders: list[Order]) -> CustomerDrift | None:
        orders_count, spent, points = expected_aggregates(orders)
        if (
            customer.total_orders == orders_count
            and customer.total_spent == spent
            and customer.total_points == points
        ):
            return None
        return CustomerDrift(
            customer_id=customer.id,  # type: ignore[arg-type]
            phone=customer.phone,
            recorded_orders=customer.total_orders,
            expected_orders=orders_count,
            recorded_spent=customer.total_spent.amount,
            expected_spent=spent.amount,
            recorded_points=customer.total_points,
            expected_points=points,
        )
