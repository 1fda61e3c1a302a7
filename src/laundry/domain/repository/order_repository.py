"""Abstract repository for Order aggregate.

Soft-deleted orders are invisible to every lookup below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from laundry.domain.model.order import Order
from laundry.domain.model.order_status import OrderStatus, PaymentStatus


@dataclass(frozen=True)
class OrderFilter:
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    customer_id: int | None = None
    search: str | None = None
    limit: int = 50


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, order_id: int) -> Order | None:
        """Return an order with its row locked until the transaction ends."""

    @abstractmethod
    def get_by_tracking_code(self, tracking_code: str) -> Order | None:
        """Return an order by its tracking code, or None if not found."""

    @abstractmethod
    def tracking_code_exists(self, tracking_code: str) -> bool:
        """True if any order, deleted or not, already uses the code."""

    @abstractmethod
    def list(self, criteria: OrderFilter) -> list[Order]:
        """Orders matching the filter, newest first."""

    @abstractmethod
    def list_for_customer(
        self, customer_id: int, include_deleted: bool = False
    ) -> list[Order]:
        """Every order of a customer, oldest first.

        Soft-deleted orders are left out unless ``include_deleted`` is set.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID if new."""
