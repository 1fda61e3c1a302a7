"""CLI commands for the Order aggregate."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from laundry.application.add_order_note import (
    AddOrderNoteHandler,
    MarkNotificationSentHandler,
)
from laundry.application.confirm_booking import ConfirmBookingHandler
from laundry.application.create_booking import CreateBookingHandler
from laundry.application.create_walk_in_order import CreateWalkInOrderHandler
from laundry.application.delete_order import DeleteOrderHandler
from laundry.application.dto import (
    BookingRequest,
    ConfirmBookingRequest,
    CustomerContact,
    OrderDTO,
    OrderItemSpec,
    PaymentInfo,
    WalkInOrderRequest,
)
from laundry.application.list_orders import ListOrdersHandler
from laundry.application.show_order import ShowOrderHandler, TrackOrderHandler
from laundry.application.update_order_status import UpdateOrderStatusHandler
from laundry.application.update_payment import UpdatePaymentHandler
from laundry.domain.exceptions import DomainException
from laundry.domain.model.order_status import OrderStatus, PaymentMethod, PaymentStatus
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.order_repository import OrderFilter
from laundry.infrastructure.bootstrap import unit_of_work
from laundry.infrastructure.cli.options import actor_option, choice_of
from laundry.logging_config import LogContext


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3.5,2:1!' into OrderItemSpec list. A trailing '!' means express."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ServiceID:Qty'."
            )
        service_str, qty_str = pair.split(":", 1)
        express = qty_str.endswith("!")
        qty_str = qty_str.rstrip("!")
        try:
            service_id = int(service_str)
            qty = Decimal(qty_str)
        except (ValueError, InvalidOperation):
            raise click.BadParameter(f"Invalid item '{pair}'.")
        specs.append(OrderItemSpec(service_id=service_id, qty=qty, is_express=express))
    return specs


def _decimal(raw: str, what: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid {what} '{raw}'.")


def _payment(status: str | None, method: str | None) -> PaymentInfo:
    return PaymentInfo(
        status=PaymentStatus(status) if status else PaymentStatus.UNPAID,
        method=PaymentMethod(method) if method else None,
    )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  {dto.tracking_code}  (status={dto.status})")
    click.echo(f"Customer #{dto.customer_id}  payment={dto.payment_status}"
               + (f" via {dto.payment_method}" if dto.payment_method else ""))
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Service':<24} {'Qty':>8} {'Price':>16} {'Subtotal':>16}")
    click.echo(f"  {'-'*67}")
    for item in dto.items:
        name = item.service_name + (" (express)" if item.is_express else "")
        click.echo(
            f"  {name:<24} {item.qty:>8} {str(Money(item.price_at_moment)):>16} "
            f"{str(Money(item.subtotal)):>16}"
        )
    click.echo(f"  {'-'*67}")
    click.echo(f"  {'Total':<34} {str(Money(dto.total_price)):>33}")
    click.echo(f"  {'Discount':<34} {str(Money(dto.discount_amount)):>33}")
    click.echo(f"  {'Final':<34} {str(Money(dto.final_price)):>33}")
    if dto.points_used or dto.points_earned:
        click.echo(f"  Points used: {dto.points_used}  earned: {dto.points_earned}")

    if dto.history:
        click.echo()
        click.echo("History:")
        for entry in dto.history:
            click.echo(f"  #{entry.id:<5} {entry.created_at:%Y-%m-%d %H:%M}  {entry.action:<13} "
                       f"{entry.status:<10} {entry.notes or ''}")


@click.command("book")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--service", "service_id", required=True, type=int, help="Service ID.")
@click.option("--qty", default="1", show_default=True, help="Estimated quantity.")
@click.option("--express", is_flag=True, default=False, help="Express service.")
@click.option("--notes", default=None, help="Customer notes.")
def order_book(name: str, phone: str, service_id: int, qty: str,
               express: bool, notes: str | None) -> None:
    """Create a public booking (no stock is touched)."""
    request = BookingRequest(
        contact=CustomerContact(name=name, phone=phone),
        service_id=service_id,
        estimated_qty=_decimal(qty, "quantity"),
        is_express=express,
        notes=notes,
    )

    try:
        dto = CreateBookingHandler(unit_of_work()).handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Booking {dto.tracking_code} created (order #{dto.id}), "
               f"estimate {Money(dto.final_price)}")


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
@click.option("--items", required=True, help="Measured items as 'ServiceID:Qty[!],...'.")
@click.option("--discount", default="0", show_default=True, help="Manual discount.")
@click.option("--points", default=0, show_default=True, help="Points to redeem.")
@click.option("--payment", type=choice_of(PaymentStatus), default=None)
@click.option("--method", type=choice_of(PaymentMethod), default=None)
@actor_option
def order_confirm(order_id: int, items: str, discount: str, points: int,
                  payment: str | None, method: str | None, actor: int | None) -> None:
    """Confirm a booking (deducts materials)."""
    request = ConfirmBookingRequest(
        items=_parse_items(items),
        discount_amount=_decimal(discount, "discount"),
        points_used=points,
        payment=_payment(payment, method),
    )

    try:
        with LogContext.bind(actor_id=actor):
            dto = ConfirmBookingHandler(unit_of_work()).handle(order_id, request, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("walk-in")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--items", required=True, help="Items as 'ServiceID:Qty[!],...'.")
@click.option("--discount", default="0", show_default=True, help="Manual discount.")
@click.option("--points", default=0, show_default=True, help="Points to redeem.")
@click.option("--payment", type=choice_of(PaymentStatus), default=None)
@click.option("--method", type=choice_of(PaymentMethod), default=None)
@click.option("--notes", default=None, help="Customer notes.")
@actor_option
def order_walk_in(name: str, phone: str, items: str, discount: str, points: int,
                  payment: str | None, method: str | None, notes: str | None,
                  actor: int | None) -> None:
    """Take an order at the counter (deducts materials)."""
    request = WalkInOrderRequest(
        contact=CustomerContact(name=name, phone=phone),
        items=_parse_items(items),
        discount_amount=_decimal(discount, "discount"),
        points_used=points,
        payment=_payment(payment, method),
        notes=notes,
    )

    try:
        with LogContext.bind(actor_id=actor):
            dto = CreateWalkInOrderHandler(unit_of_work()).handle(request, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, type=choice_of(OrderStatus))
@click.option("--notes", default=None, help="History note.")
@click.option("--expect", "expected", type=choice_of(OrderStatus), default=None,
              help="Fail if the order is no longer in this status.")
@actor_option
def order_status(order_id: int, new_status: str, notes: str | None,
                 expected: str | None, actor: int | None) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(unit_of_work())

    try:
        with LogContext.bind(actor_id=actor):
            dto = handler.handle(
                order_id,
                OrderStatus(new_status),
                notes=notes,
                actor_id=actor,
                expected_status=OrderStatus(expected) if expected else None,
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.tracking_code} is now {dto.status}.")


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", "payment", required=True, type=choice_of(PaymentStatus))
@click.option("--method", type=choice_of(PaymentMethod), default=None)
@actor_option
def order_pay(order_id: int, payment: str, method: str | None, actor: int | None) -> None:
    """Record a payment."""
    handler = UpdatePaymentHandler(unit_of_work())

    try:
        dto = handler.handle(
            order_id,
            PaymentStatus(payment),
            PaymentMethod(method) if method else None,
            actor,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.tracking_code} payment is {dto.payment_status}.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("track")
@click.argument("tracking_code")
def order_track(tracking_code: str) -> None:
    """Look up an order by its tracking code."""
    try:
        dto = TrackOrderHandler(unit_of_work()).handle(tracking_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", type=choice_of(OrderStatus), default=None)
@click.option("--payment", type=choice_of(PaymentStatus), default=None)
@click.option("--search", default=None, help="Tracking code, name or phone.")
@click.option("--limit", default=50, show_default=True)
def order_list(status: str | None, payment: str | None,
               search: str | None, limit: int) -> None:
    """List orders, newest first."""
    criteria = OrderFilter(
        status=OrderStatus(status) if status else None,
        payment_status=PaymentStatus(payment) if payment else None,
        search=search,
        limit=limit,
    )
    orders = ListOrdersHandler(unit_of_work()).handle(criteria)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Code':<12} {'Status':<10} {'Payment':<8} {'Final':>18}")
    click.echo("-" * 58)
    for o in orders:
        click.echo(f"{o.id:<6} {o.tracking_code:<12} {o.status:<10} "
                   f"{o.payment_status:<8} {str(Money(o.final_price)):>18}")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@actor_option
def order_delete(order_id: int, actor: int | None) -> None:
    """Soft-delete an order that holds no materials."""
    try:
        DeleteOrderHandler(unit_of_work()).handle(order_id, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("note")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--text", required=True, help="Note text.")
@actor_option
def order_note(order_id: int, text: str, actor: int | None) -> None:
    """Append a note to an order's history."""
    try:
        AddOrderNoteHandler(unit_of_work()).handle(order_id, text, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Note added to order #{order_id}.")


@click.command("notified")
@click.option("--history-id", required=True, type=int, help="History entry ID.")
def order_notified(history_id: int) -> None:
    """Mark a history entry's customer notification as sent."""
    try:
        MarkNotificationSentHandler(unit_of_work()).handle(history_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"History entry #{history_id} marked as notified.")
