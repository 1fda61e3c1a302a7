"""Tests for the ConfirmBooking use case."""

from decimal import Decimal

import pytest

from laundry.application.confirm_booking import ConfirmBookingHandler
from laundry.application.create_booking import CreateBookingHandler
from laundry.application.dto import (
    BookingRequest,
    ConfirmBookingRequest,
    CustomerContact,
    OrderItemSpec,
    PaymentInfo,
)
from laundry.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidStateError,
)
from laundry.domain.model.order_status import OrderStatus, PaymentMethod, PaymentStatus
from tests.fakes import BED_COVER, CUCI_KERING, CUCI_SETRIKA, DETERJEN, PEWANGI, seeded_uow


def _setup(points: int = 0, **stock):
    uow = seeded_uow(**stock)
    booking = CreateBookingHandler(uow).handle(
        BookingRequest(CustomerContact("Sari", "08123"), CUCI_KERING, Decimal("3"))
    )
    if points:
        customer = uow.customers.get_by_phone("08123")
        customer.total_points = points
        uow.customers.save(customer)
    return uow, booking


def _confirm(uow, order_id, items, **kwargs):
    return ConfirmBookingHandler(uow).handle(
        order_id, ConfirmBookingRequest(items=items, **kwargs), actor_id=5
    )


class TestConfirmBookingHappyPath:

    def test_confirm_prices_measured_items_and_deducts(self):
        uow, booking = _setup()

        dto = _confirm(uow, booking.id, [
            OrderItemSpec(CUCI_SETRIKA, Decimal("4.5")),
            OrderItemSpec(BED_COVER, Decimal("1")),
        ])

        assert dto.status == "PENDING"
        assert dto.total_price == Decimal("70000.00")
        assert [i.service_name for i in dto.items] == ["Cuci Setrika", "Bed Cover"]
        assert uow.materials.get_by_id(DETERJEN).stock_qty == Decimal("5000") - Decimal("650")
        assert uow.materials.get_by_id(PEWANGI).stock_qty == Decimal("2000") - Decimal("185")
        assert [h.action for h in dto.history] == ["CREATED", "STATUS_CHANGE"]
        assert dto.history[-1].previous_status == "BOOKED"

    def test_confirm_with_discount_points_and_payment(self):
        uow, booking = _setup(points=50)

        dto = _confirm(
            uow, booking.id, [OrderItemSpec(CUCI_KERING, Decimal("5"))],
            discount_amount=Decimal("2000"),
            points_used=30,
            payment=PaymentInfo(PaymentStatus.PAID, PaymentMethod.CASH),
        )

        assert dto.discount_amount == Decimal("5000.00")
        assert dto.final_price == Decimal("30000.00")
        assert dto.points_used == 30
        assert dto.payment_status == "PAID"
        assert dto.payment_method == "CASH"
        assert uow.customers.get_by_phone("08123").total_points == 20

    def test_points_request_clamped_to_balance(self):
        uow, booking = _setup(points=5)
        dto = _confirm(uow, booking.id, [OrderItemSpec(CUCI_KERING, Decimal("1"))],
                       points_used=100)
        assert dto.points_used == 5
        assert uow.customers.get_by_phone("08123").total_points == 0

    def test_locks_materials_in_ascending_order(self):
        uow, booking = _setup()
        _confirm(uow, booking.id, [OrderItemSpec(BED_COVER, Decimal("1"))])
        assert uow.materials.lock_log == [1, 2, 3]


class TestConfirmBookingAllOrNothing:

    def test_short_material_leaves_everything_untouched(self):
        uow, booking = _setup(points=50, pewangi="100")

        with pytest.raises(InsufficientStockError) as info:
            _confirm(uow, booking.id, [OrderItemSpec(CUCI_SETRIKA, Decimal("5"))],
                     points_used=30)

        assert [s.material_name for s in info.value.shortages] == ["Pewangi"]
        assert info.value.shortages[0].shortfall == Decimal("50")
        order = uow.orders.get_by_id(booking.id)
        assert order.status is OrderStatus.BOOKED
        assert order.total_price.amount == Decimal("21000.00")
        assert uow.materials.get_by_id(DETERJEN).stock_qty == Decimal("5000")
        assert uow.movements.all() == []
        assert uow.customers.get_by_phone("08123").total_points == 50

    def test_cannot_confirm_twice(self):
        uow, booking = _setup()
        _confirm(uow, booking.id, [OrderItemSpec(CUCI_KERING, Decimal("1"))])
        with pytest.raises(InvalidStateError, match="Only BOOKED"):
            _confirm(uow, booking.id, [OrderItemSpec(CUCI_KERING, Decimal("1"))])
        assert len(uow.movements.all()) == 1

    def test_confirm_nonexistent_order_rejected(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            _confirm(uow, 999, [OrderItemSpec(CUCI_KERING, Decimal("1"))])
