"""Abstract repository for the append-only stock movement journal."""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.model.material import StockMovement, StockMovementType


class StockMovementRepository(ABC):

    @abstractmethod
    def add(self, movement: StockMovement) -> StockMovement:
        """Append a movement and return it with its ID assigned."""

    @abstractmethod
    def list_for_order(
        self, order_id: int, movement_type: StockMovementType | None = None
    ) -> list[StockMovement]:
        """Movements recorded against an order, oldest first."""

    @abstractmethod
    def list_for_material(self, material_id: int, limit: int = 50) -> list[StockMovement]:
        """Movements of a material, newest first."""
