"""Unit tests for the StockLedger domain service."""

from decimal import Decimal

import pytest

from laundry.domain.exceptions import EntityNotFoundError, InsufficientStockError
from laundry.domain.model.material import Material, StockMovementType
from laundry.domain.model.order import Order, OrderItem
from laundry.domain.model.value_objects import Money, Quantity
from laundry.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeMaterialRepository, FakeStockMovementRepository


def _setup(*stocks: str):
    materials = [
        Material(None, f"Material {i}", f"MAT-{i}", "ml", Decimal(stock))
        for i, stock in enumerate(stocks, start=1)
    ]
    material_repo = FakeMaterialRepository(materials)
    movement_repo = FakeStockMovementRepository()
    return StockLedger(material_repo, movement_repo), material_repo, movement_repo


def _order(order_id: int = 1) -> Order:
    item = OrderItem(1, "Cuci Kering", Quantity.of("1"), Money.of("7000"), Money.of("7000"))
    return Order(id=order_id, tracking_code="WALKIN0001", customer_id=1, items=[item])


def _stock(repo: FakeMaterialRepository, material_id: int) -> Decimal:
    return repo.get_by_id(material_id).stock_qty


class TestCheckAvailability:

    def test_sufficient(self):
        ledger, _, _ = _setup("100", "50")
        check = ledger.check_availability({1: Decimal("100"), 2: Decimal("10")})
        assert check.sufficient
        assert check.shortages == []

    def test_reports_every_shortage(self):
        ledger, repo, movements = _setup("100", "50")
        check = ledger.check_availability({1: Decimal("101"), 2: Decimal("60")})
        assert not check.sufficient
        assert [s.material_id for s in check.shortages] == [1, 2]
        assert movements.all() == []
        assert _stock(repo, 1) == Decimal("100")

    def test_unknown_material_is_a_shortage(self):
        ledger, _, _ = _setup("100")
        check = ledger.check_availability({42: Decimal("1")})
        assert check.shortages[0].material_name == "Unknown"


class TestDeductForOrder:

    def test_deducts_all_and_locks_in_id_order(self):
        ledger, repo, movements = _setup("100", "50", "10")
        ledger.deduct_for_order(_order(), {3: Decimal("1"), 1: Decimal("40"), 2: Decimal("5")})
        assert repo.lock_log == [1, 2, 3]
        assert [_stock(repo, i) for i in (1, 2, 3)] == [
            Decimal("60"), Decimal("45"), Decimal("9")
        ]
        assert all(m.type is StockMovementType.OUT for m in movements.all())
        assert all(m.order_id == 1 for m in movements.all())

    def test_all_or_nothing_when_one_material_short(self):
        ledger, repo, movements = _setup("100", "5")
        with pytest.raises(InsufficientStockError) as info:
            ledger.deduct_for_order(_order(), {1: Decimal("40"), 2: Decimal("6")})
        assert [s.material_id for s in info.value.shortages] == [2]
        assert _stock(repo, 1) == Decimal("100")
        assert movements.all() == []

    def test_stock_equals_latest_movement(self):
        ledger, repo, movements = _setup("100")
        ledger.deduct_for_order(_order(1), {1: Decimal("30")})
        ledger.deduct_for_order(_order(2), {1: Decimal("20")})
        latest = movements.list_for_material(1)[0]
        assert latest.stock_after == _stock(repo, 1) == Decimal("50")

    def test_unknown_material_fails(self):
        ledger, _, _ = _setup("100")
        with pytest.raises(EntityNotFoundError):
            ledger.deduct_for_order(_order(), {9: Decimal("1")})


class TestRestoreForOrder:

    def test_restores_each_out_movement_exactly(self):
        ledger, repo, movements = _setup("100", "50")
        order = _order()
        ledger.deduct_for_order(order, {1: Decimal("30"), 2: Decimal("5")})

        restored = ledger.restore_for_order(order)

        assert [_stock(repo, 1), _stock(repo, 2)] == [Decimal("100"), Decimal("50")]
        assert [(m.material_id, m.quantity, m.type) for m in restored] == [
            (1, Decimal("30"), StockMovementType.IN),
            (2, Decimal("5"), StockMovementType.IN),
        ]
        assert "Reversal of order WALKIN0001" in restored[0].notes

    def test_order_without_deductions_restores_nothing(self):
        ledger, _, movements = _setup("100")
        assert ledger.restore_for_order(_order()) == []
        assert movements.all() == []


class TestManualOperations:

    def test_add_stock(self):
        ledger, repo, _ = _setup("100")
        movement = ledger.add_stock(1, Decimal("900"), "Delivery")
        assert movement.id is not None
        assert _stock(repo, 1) == Decimal("1000")

    def test_adjust_stock(self):
        ledger, repo, _ = _setup("100")
        movement = ledger.adjust_stock(1, Decimal("130"))
        assert movement.type is StockMovementType.ADJUSTMENT
        assert movement.quantity == Decimal("30")
        assert _stock(repo, 1) == Decimal("130")

    def test_low_stock_lists_active_materials_at_threshold(self):
        ledger, repo, _ = _setup("100", "150")
        inactive = Material(None, "Old", "OLD", "ml", Decimal("0"), is_active=False)
        repo.save(inactive)
        assert [m.id for m in ledger.low_stock()] == [1]

    def test_history_newest_first(self):
        ledger, _, _ = _setup("100")
        ledger.add_stock(1, Decimal("1"))
        ledger.add_stock(1, Decimal("2"))
        assert [m.quantity for m in ledger.history(1)] == [Decimal("2"), Decimal("1")]
