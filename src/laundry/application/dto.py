"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the outer layers (HTTP, CLI) and the
application layer without exposing domain internals to the outside
world.  Input DTOs are already shape-validated by the caller; business
rules are still enforced by the domain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from laundry.domain.model.history import OrderHistory
from laundry.domain.model.material import Material, StockMovement
from laundry.domain.model.order import Order
from laundry.domain.model.order_status import PaymentMethod, PaymentStatus

# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class CustomerContact:
    """Who the order is for. Customers are matched by phone."""

    name: str
    phone: str
    email: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one finalised line (service + measured quantity)."""

    service_id: int
    qty: Decimal
    is_express: bool = False
    notes: str | None = None


@dataclass(frozen=True)
class PaymentInfo:
    status: PaymentStatus = PaymentStatus.UNPAID
    method: PaymentMethod | None = None


@dataclass(frozen=True)
class BookingRequest:
    """Input: a public self-service booking with an estimated quantity."""

    contact: CustomerContact
    service_id: int
    estimated_qty: Decimal = Decimal("1")
    is_express: bool = False
    pickup_date: datetime | None = None
    notes: str | None = None
    item_notes: str | None = None


@dataclass(frozen=True)
class ConfirmBookingRequest:
    """Input: the measured items and the agreed price terms for a booking."""

    items: list[OrderItemSpec]
    discount_amount: Decimal = Decimal("0")
    points_used: int = 0
    payment: PaymentInfo = field(default_factory=PaymentInfo)
    pickup_date: datetime | None = None
    internal_notes: str | None = None


@dataclass(frozen=True)
class WalkInOrderRequest:
    """Input: an order taken at the counter."""

    contact: CustomerContact
    items: list[OrderItemSpec]
    discount_amount: Decimal = Decimal("0")
    points_used: int = 0
    payment: PaymentInfo = field(default_factory=PaymentInfo)
    pickup_date: datetime | None = None
    notes: str | None = None
    internal_notes: str | None = None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    service_id: int
    service_name: str
    qty: Decimal
    price_at_moment: Decimal
    is_express: bool
    subtotal: Decimal


@dataclass(frozen=True)
class OrderHistoryDTO:
    status: str
    previous_status: str | None
    action: str
    notes: str | None
    created_by: int | None
    created_at: datetime
    id: int | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    tracking_code: str
    customer_id: int
    status: str
    payment_status: str
    payment_method: str | None
    items: list[OrderItemDTO]
    total_price: Decimal
    discount_amount: Decimal
    final_price: Decimal
    points_earned: int
    points_used: int
    created_at: datetime
    history: list[OrderHistoryDTO] = field(default_factory=list)


@dataclass(frozen=True)
class StockMovementDTO:
    material_id: int
    type: str
    quantity: Decimal
    stock_before: Decimal
    stock_after: Decimal
    order_id: int | None
    notes: str | None
    created_at: datetime


@dataclass(frozen=True)
class MaterialStockDTO:
    id: int
    name: str
    sku: str
    unit: str
    stock_qty: Decimal
    min_stock_alert: Decimal
    status: str  # "LOW" or "OK"


# --- Mapping ------------------------------------------------------------------


def history_to_dto(entry: OrderHistory) -> OrderHistoryDTO:
    return OrderHistoryDTO(
        status=entry.status.value,
        previous_status=entry.previous_status.value if entry.previous_status else None,
        action=entry.action.value,
        notes=entry.notes,
        created_by=entry.created_by,
        created_at=entry.created_at,
        id=entry.id,
    )


def order_to_dto(order: Order, history: list[OrderHistory] | None = None) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        tracking_code=order.tracking_code,
        customer_id=order.customer_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value if order.payment_method else None,
        items=[
            OrderItemDTO(
                service_id=item.service_id,
                service_name=item.service_name,
                qty=item.qty.value,
                price_at_moment=item.price_at_moment.amount,
                is_express=item.is_express,
                subtotal=item.subtotal.amount,
            )
            for item in order.items
        ],
        total_price=order.total_price.amount,
        discount_amount=order.discount_amount.amount,
        final_price=order.final_price.amount,
        points_earned=order.points_earned,
        points_used=order.points_used,
        created_at=order.created_at,
        history=[history_to_dto(h) for h in history or []],
    )


def movement_to_dto(movement: StockMovement) -> StockMovementDTO:
    return StockMovementDTO(
        material_id=movement.material_id,
        type=movement.type.value,
        quantity=movement.quantity,
        stock_before=movement.stock_before,
        stock_after=movement.stock_after,
        order_id=movement.order_id,
        notes=movement.notes,
        created_at=movement.created_at,
    )


def material_to_dto(material: Material) -> MaterialStockDTO:
    return MaterialStockDTO(
        id=material.id,  # type: ignore[arg-type]
        name=material.name,
        sku=material.sku,
        unit=material.unit,
        stock_qty=material.stock_qty,
        min_stock_alert=material.min_stock_alert,
        status="LOW" if material.is_low_stock else "OK",
    )
