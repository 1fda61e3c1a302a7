"""Abstract repository for Customer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, customer_id: int) -> Customer | None:
        """Return a customer with its row locked until the transaction ends."""

    @abstractmethod
    def get_by_phone(self, phone: str) -> Customer | None:
        """Return a customer by phone number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer, assigning an ID if new."""
