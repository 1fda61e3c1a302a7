"""Domain service: Customer Loyalty Ledger.

Points are earned on spend (one point per ``POINT_EARN_UNIT`` of final
price) and redeemed as a discount worth ``POINT_REDEMPTION_VALUE`` each.
Accrual happens exactly once, when an order is picked up.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal

from laundry.domain.exceptions import ValidationError
from laundry.domain.model.customer import Customer
from laundry.domain.model.order import Order
from laundry.domain.model.value_objects import Money
from laundry.logging_config import get_logger

logger = get_logger("loyalty")

POINT_EARN_UNIT = Decimal("10000")
POINT_REDEMPTION_VALUE = Decimal("100")


def points_for(amount: Money) -> int:
    return int((amount.amount / POINT_EARN_UNIT).to_integral_value(rounding=ROUND_FLOOR))


def points_discount(points: int) -> Money:
    return Money(POINT_REDEMPTION_VALUE * points)


class LoyaltyLedger:

    def accrue_points(self, customer: Customer, order: Order) -> int:
        """Credit points for an order's final price and stamp them on the order.

        Idempotency is the caller's job: call once per order reaching TAKEN.
        """
        earned = points_for(order.final_price)
        if earned > 0:
            customer.add_points(earned)
        order.points_earned = earned
        logger.info(
            "points_accrued",
            extra={"customer_id": customer.id, "points": earned,
                   "tracking_code": order.tracking_code},
        )
        return earned

    def spend_points(self, customer: Customer, requested: int) -> int:
        """Spend up to ``requested`` points and return how many were spent.

        Never fails for lack of points; it spends what is available.
        """
        if requested < 0:
            raise ValidationError("Requested points cannot be negative")
        spent = min(requested, customer.total_points)
        if spent > 0:
            customer.deduct_points(spent)
        return spent

    def record_order(self, customer: Customer, order: Order) -> None:
        """Count a picked-up order in the customer's lifetime totals."""
        customer.record_order(order.final_price)
