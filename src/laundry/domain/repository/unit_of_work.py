"""Abstract unit of work: one database transaction around a use case.

Usage::

    with uow:
        order = uow.orders.get_for_update(order_id)
        ...
        uow.commit()

Leaving the block without ``commit()``, or through an exception, rolls
every change back.  Nothing partial is ever persisted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from laundry.domain.repository.customer_repository import CustomerRepository
from laundry.domain.repository.history_repository import OrderHistoryRepository
from laundry.domain.repository.material_repository import MaterialRepository
from laundry.domain.repository.order_repository import OrderRepository
from laundry.domain.repository.service_repository import ServiceRepository
from laundry.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)


class UnitOfWork(ABC):

    orders: OrderRepository
    customers: CustomerRepository
    services: ServiceRepository
    materials: MaterialRepository
    movements: StockMovementRepository
    histories: OrderHistoryRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit of work permanent."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change. Safe to call after commit."""
