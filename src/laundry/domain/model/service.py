"""Service aggregate: a catalog entry together with its material recipe.

Services live independently of orders. They have their own lifecycle:
prices change, recipes are tuned, services are retired.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from laundry.domain.exceptions import ValidationError
from laundry.domain.model.value_objects import Money

DEFAULT_EXPRESS_MULTIPLIER = Decimal("1.50")


class UnitType(Enum):
    KG = "KG"
    PCS = "PCS"


@dataclass(frozen=True)
class ServiceMaterial:
    """One recipe row: how much of a material one unit of service consumes."""

    material_id: int
    quantity_needed: Decimal

    def __post_init__(self) -> None:
        if self.quantity_needed <= 0:
            raise ValidationError("Recipe quantity must be positive")


@dataclass
class Service:
    """A laundry service in the catalog.

    ``recipe`` is the bill of materials per unit of service.  An empty
    recipe is legal: some services (ironing only, for instance) consume no
    tracked material.
    """

    id: int | None
    code: str
    name: str
    price: Money
    unit_type: UnitType = UnitType.KG
    is_express_available: bool = False
    express_multiplier: Decimal = DEFAULT_EXPRESS_MULTIPLIER
    is_active: bool = True
    recipe: list[ServiceMaterial] = field(default_factory=list)

    def update_price(self, new_price: Money) -> None:
        """Change the service price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Service price must be greater than zero")
        self.price = new_price

    def set_recipe_line(self, material_id: int, quantity_needed: Decimal) -> None:
        """Add or replace the recipe row for a material."""
        line = ServiceMaterial(material_id=material_id, quantity_needed=quantity_needed)
        self.recipe = [r for r in self.recipe if r.material_id != material_id]
        self.recipe.append(line)
        self.recipe.sort(key=lambda r: r.material_id)

    def remove_recipe_line(self, material_id: int) -> None:
        self.recipe = [r for r in self.recipe if r.material_id != material_id]
