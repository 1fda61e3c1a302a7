"""Tests for catalog maintenance: services, prices and recipes."""

from decimal import Decimal

import pytest

from laundry.application.add_service import AddServiceHandler, SetServiceRecipeHandler
from laundry.application.update_service_price import UpdateServicePriceHandler
from laundry.domain.exceptions import EntityNotFoundError, ValidationError
from laundry.domain.model.service import ServiceMaterial, UnitType
from tests.fakes import DETERJEN, PEWANGI, SETRIKA_SAJA, seeded_uow


class TestAddService:

    def test_code_is_upper_cased(self):
        uow = seeded_uow()
        service = AddServiceHandler(uow).handle(
            "kb", " Karpet Besar ", "45000", UnitType.PCS
        )
        stored = uow.services.get_by_code("KB")
        assert stored.id == service.id
        assert stored.name == "Karpet Besar"
        assert stored.price.amount == Decimal("45000.00")
        assert stored.recipe == []

    def test_duplicate_code_rejected(self):
        with pytest.raises(ValidationError, match="already exists"):
            AddServiceHandler(seeded_uow()).handle("ck", "Cuci Kering 2", "8000")

    @pytest.mark.parametrize("price", ["0", "-5"])
    def test_non_positive_price_rejected(self, price):
        uow = seeded_uow()
        with pytest.raises(ValidationError):
            AddServiceHandler(uow).handle("XX", "Gratis", price)
        assert uow.services.get_by_code("XX") is None

    def test_multiplier_below_one_rejected(self):
        with pytest.raises(ValidationError):
            AddServiceHandler(seeded_uow()).handle(
                "XP", "Express", "9000", express_multiplier=Decimal("0.5")
            )


class TestRecipe:

    def test_set_and_replace_line(self):
        uow = seeded_uow()
        handler = SetServiceRecipeHandler(uow)
        handler.handle("ss", "PWG-01", "10")
        handler.handle("SS", "PWG-01", "15")

        assert uow.services.get_by_id(SETRIKA_SAJA).recipe == [
            ServiceMaterial(PEWANGI, Decimal("15"))
        ]

    def test_zero_removes_line(self):
        uow = seeded_uow()
        SetServiceRecipeHandler(uow).handle("CS", "PWG-01", "0")
        assert uow.services.get_by_code("CS").recipe == [
            ServiceMaterial(DETERJEN, Decimal("100"))
        ]

    def test_unknown_material_rejected(self):
        with pytest.raises(EntityNotFoundError):
            SetServiceRecipeHandler(seeded_uow()).handle("CS", "NOPE", "1")

    def test_invalid_quantity_rejected(self):
        with pytest.raises(ValidationError):
            SetServiceRecipeHandler(seeded_uow()).handle("CS", "PWG-01", "abc")


class TestUpdatePrice:

    def test_unknown_service_rejected(self):
        with pytest.raises(EntityNotFoundError):
            UpdateServicePriceHandler(seeded_uow()).handle(99, "1000")

    def test_zero_price_rejected(self):
        uow = seeded_uow()
        with pytest.raises(ValidationError):
            UpdateServicePriceHandler(uow).handle(SETRIKA_SAJA, "0")
        assert uow.services.get_by_id(SETRIKA_SAJA).price.amount == Decimal("5000.00")
