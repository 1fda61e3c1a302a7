"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from laundry.domain.exceptions import ValidationError
from laundry.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10500"))
        assert m.amount == Decimal("10500.00")
        assert m.currency == "IDR"

    def test_amount_is_quantized_to_cents(self):
        assert Money(Decimal("10.005")).amount == Decimal("10.01")

    def test_of_factory_from_string(self):
        assert Money.of("25000.50").amount == Decimal("25000.50")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_addition(self):
        assert Money.of("10000") + Money.of("5500") == Money.of("15500")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_decimal(self):
        assert Money.of("7000") * Decimal("3.5") == Money.of("24500")

    def test_multiplication_by_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7000") * True

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "IDR") + Money(Decimal("5"), "USD")

    def test_str_formatting(self):
        assert str(Money.of("24500")) == "Rp 24,500.00"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_fractional_kilograms_allowed(self):
        assert Quantity.of("3.5").value == Decimal("3.5")

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity.of(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity.of("-3")

    def test_str(self):
        assert str(Quantity.of("7.50")) == "7.5"
