"""Abstract repository for Material aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.model.material import Material


class MaterialRepository(ABC):

    @abstractmethod
    def get_by_id(self, material_id: int) -> Material | None:
        """Return a material by ID without locking, or None."""

    @abstractmethod
    def get_for_update(self, material_id: int) -> Material | None:
        """Return a material with its row locked until the transaction ends."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Material | None:
        """Return a material by its unique SKU, or None."""

    @abstractmethod
    def list_all(self) -> list[Material]:
        """Return every material, ordered by name."""

    @abstractmethod
    def save(self, material: Material) -> None:
        """Persist a new or updated material, assigning an ID if new."""
