"""Unit tests for the Customer aggregate."""

import pytest

from laundry.domain.exceptions import ValidationError
from laundry.domain.model.customer import AUTO_CREATED_NOTE, Customer


class TestRegister:

    def test_register_marks_auto_created(self):
        c = Customer.register(" Sari ", " 08123 ")
        assert c.name == "Sari"
        assert c.phone == "08123"
        assert c.notes == AUTO_CREATED_NOTE
        assert c.is_auto_created

    def test_phone_required(self):
        with pytest.raises(ValidationError, match="phone"):
            Customer.register("Sari", "  ")

    def test_blank_name_gets_placeholder(self):
        assert Customer.register("", "0812").name == "Customer"


class TestPoints:

    def test_deduct_more_than_balance_rejected(self):
        c = Customer(id=1, name="Sari", phone="0812", total_points=2)
        with pytest.raises(ValidationError, match="cannot deduct"):
            c.deduct_points(3)
        assert c.total_points == 2
