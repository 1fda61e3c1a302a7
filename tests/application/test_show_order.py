"""Tests for the order query use cases (show, track, list)."""

from decimal import Decimal

import pytest

from laundry.application.create_booking import CreateBookingHandler
from laundry.application.create_walk_in_order import CreateWalkInOrderHandler
from laundry.application.delete_order import DeleteOrderHandler
from laundry.application.dto import (
    BookingRequest,
    CustomerContact,
    OrderItemSpec,
    WalkInOrderRequest,
)
from laundry.application.list_orders import ListOrdersHandler
from laundry.application.show_order import ShowOrderHandler, TrackOrderHandler
from laundry.application.update_order_status import UpdateOrderStatusHandler
from laundry.application.update_service_price import UpdateServicePriceHandler
from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.repository.order_repository import OrderFilter
from tests.fakes import CUCI_KERING, seeded_uow


def _walk_in(uow, phone="08123", qty="2"):
    return CreateWalkInOrderHandler(uow).handle(
        WalkInOrderRequest(CustomerContact("Sari", phone),
                           [OrderItemSpec(CUCI_KERING, Decimal(qty))])
    )


class TestTrackOrder:

    def test_lookup_is_case_insensitive(self):
        uow = seeded_uow()
        order = _walk_in(uow)
        dto = TrackOrderHandler(uow).handle(f"  {order.tracking_code.lower()} ")
        assert dto.id == order.id

    def test_history_is_chronological(self):
        uow = seeded_uow()
        order = _walk_in(uow)
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order.id, OrderStatus.WASHING)
        handler.handle(order.id, OrderStatus.DRYING)

        dto = TrackOrderHandler(uow).handle(order.tracking_code)
        assert [h.status for h in dto.history] == ["PENDING", "WASHING", "DRYING"]

    def test_unknown_code_rejected(self):
        with pytest.raises(EntityNotFoundError, match="ZZZZZZ"):
            TrackOrderHandler(seeded_uow()).handle("zzzzzz")

    def test_deleted_order_is_invisible(self):
        uow = seeded_uow()
        booking = CreateBookingHandler(uow).handle(
            BookingRequest(CustomerContact("Sari", "08123"), CUCI_KERING)
        )
        DeleteOrderHandler(uow).handle(booking.id)
        with pytest.raises(EntityNotFoundError):
            TrackOrderHandler(uow).handle(booking.tracking_code)
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle(booking.id)


class TestPriceSnapshot:

    def test_price_change_does_not_touch_existing_orders(self):
        uow = seeded_uow()
        order = _walk_in(uow, qty="2")

        UpdateServicePriceHandler(uow).handle(CUCI_KERING, "9000")

        dto = ShowOrderHandler(uow).handle(order.id)
        assert dto.items[0].price_at_moment == Decimal("7000.00")
        assert dto.total_price == Decimal("14000.00")
        assert _walk_in(uow, qty="2").total_price == Decimal("18000.00")


class TestListOrders:

    def test_filters_and_newest_first(self):
        uow = seeded_uow()
        first = _walk_in(uow, phone="0811")
        second = _walk_in(uow, phone="0822")
        UpdateOrderStatusHandler(uow).handle(first.id, OrderStatus.WASHING)

        handler = ListOrdersHandler(uow)
        assert [o.id for o in handler.handle()] == [second.id, first.id]
        washing = handler.handle(OrderFilter(status=OrderStatus.WASHING))
        assert [o.id for o in washing] == [first.id]
        assert [o.id for o in handler.handle(OrderFilter(limit=1))] == [second.id]
