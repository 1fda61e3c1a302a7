"""Abstract repository for Service aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.model.service import Service


class ServiceRepository(ABC):

    @abstractmethod
    def get_by_id(self, service_id: int) -> Service | None:
        """Return a service (with its recipe) by ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Service | None:
        """Return a service by its unique code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Service]:
        """Return every service in the catalog."""

    @abstractmethod
    def save(self, service: Service) -> None:
        """Persist a new or updated service, assigning an ID if new."""
