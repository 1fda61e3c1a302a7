"""Pricing rules.

These two functions are the only place prices are computed.  Bookings,
confirmations, walk-in orders and the Order aggregate itself all go
through them, so an estimate and a confirmed price differ only by the
measured quantity.
"""

from __future__ import annotations

from decimal import Decimal

from laundry.domain.model.service import Service
from laundry.domain.model.value_objects import Money, Quantity


def calculate_price(service: Service, qty: Quantity, is_express: bool = False) -> Money:
    """Price of ``qty`` units of ``service``.

    The express multiplier applies only when the service offers express.
    """
    base = service.price * qty.value
    if is_express and service.is_express_available:
        return base * service.express_multiplier
    return base


def calculate_final_price(total: Money, discount: Money) -> Money:
    """``total - discount``, floored at zero."""
    if discount >= total:
        return Money(Decimal("0"), total.currency)
    return total - discount
