"""Application service: catalog maintenance (add service, set recipe)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from laundry.domain.exceptions import EntityNotFoundError, ValidationError
from laundry.domain.model.service import DEFAULT_EXPRESS_MULTIPLIER, Service, UnitType
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.unit_of_work import UnitOfWork


class AddServiceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        code: str,
        name: str,
        price: str,
        unit_type: UnitType = UnitType.KG,
        is_express_available: bool = False,
        express_multiplier: Decimal = DEFAULT_EXPRESS_MULTIPLIER,
    ) -> Service:
        """Add a new service to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Service name is required")
        if not code or not code.strip():
            raise ValidationError("Service code is required")
        if express_multiplier < 1:
            raise ValidationError("Express multiplier must be at least 1")

        with self._uow as uow:
            if uow.services.get_by_code(code.strip().upper()) is not None:
                raise ValidationError(f"Service '{code}' already exists")

            service = Service(
                id=None,
                code=code.strip().upper(),
                name=name.strip(),
                price=Money.of(price),
                unit_type=unit_type,
                is_express_available=is_express_available,
                express_multiplier=express_multiplier,
            )
            if service.price.amount <= 0:
                raise ValidationError("Service price must be greater than zero")
            uow.services.save(service)
            uow.commit()
        return service


class SetServiceRecipeHandler:
    """Set (or with zero, remove) how much of a material a service unit uses."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, service_code: str, material_sku: str, quantity_needed: str) -> Service:
        try:
            quantity = Decimal(quantity_needed)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid recipe quantity: {quantity_needed!r}") from exc
        if quantity < 0:
            raise ValidationError("Recipe quantity cannot be negative")

        with self._uow as uow:
            service = uow.services.get_by_code(service_code.strip().upper())
            if service is None:
                raise EntityNotFoundError(f"Service not found: '{service_code}'")
            material = uow.materials.get_by_sku(material_sku)
            if material is None:
                raise EntityNotFoundError(f"Material not found: '{material_sku}'")

            if quantity == 0:
                service.remove_recipe_line(material.id)  # type: ignore[arg-type]
            else:
                service.set_recipe_line(material.id, quantity)  # type: ignore[arg-type]
            uow.services.save(service)
            uow.commit()
        return service
