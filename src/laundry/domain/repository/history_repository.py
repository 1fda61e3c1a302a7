"""Abstract repository for the append-only order history."""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.model.history import OrderHistory


class OrderHistoryRepository(ABC):

    @abstractmethod
    def add(self, entry: OrderHistory) -> OrderHistory:
        """Append an entry and return it with its ID assigned."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[OrderHistory]:
        """Entries of an order in chronological order."""

    @abstractmethod
    def get_by_id(self, history_id: int) -> OrderHistory | None:
        """Return an entry by ID, or None if not found."""

    @abstractmethod
    def save_notification(self, entry: OrderHistory) -> None:
        """Persist the notification flags of an entry. Nothing else changes."""
