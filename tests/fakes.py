"""In-memory fake repositories and unit of work for testing.

These implement the same abstract interfaces as the SQLAlchemy
repositories but keep everything in dicts.  Reads and writes copy the
domain objects, so an unsaved mutation never leaks into the store, and
the fake unit of work restores a snapshot on rollback.
"""

from __future__ import annotations

import copy
from dataclasses import replace
from decimal import Decimal

from laundry.domain.model.customer import Customer
from laundry.domain.model.history import OrderHistory
from laundry.domain.model.material import Material, StockMovement, StockMovementType
from laundry.domain.model.order import Order
from laundry.domain.model.service import Service, ServiceMaterial, UnitType
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.customer_repository import CustomerRepository
from laundry.domain.repository.history_repository import OrderHistoryRepository
from laundry.domain.repository.material_repository import MaterialRepository
from laundry.domain.repository.order_repository import OrderFilter, OrderRepository
from laundry.domain.repository.service_repository import ServiceRepository
from laundry.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from laundry.domain.repository.unit_of_work import UnitOfWork


class _InMemory:

    def __init__(self) -> None:
        self._store: dict = {}
        self._next_id = 1

    def _assign_id(self, entity) -> None:
        if entity.id is None:
            entity.id = self._next_id
            self._next_id += 1

    def snapshot(self) -> tuple:
        return copy.deepcopy(self._store), self._next_id

    def restore(self, state: tuple) -> None:
        self._store, self._next_id = copy.deepcopy(state[0]), state[1]


class FakeOrderRepository(_InMemory, OrderRepository):

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        if order is None or order.deleted_at is not None:
            return None
        return copy.deepcopy(order)

    def get_for_update(self, order_id: int) -> Order | None:
        return self.get_by_id(order_id)

    def get_by_tracking_code(self, tracking_code: str) -> Order | None:
        for order in self._store.values():
            if order.tracking_code == tracking_code and order.deleted_at is None:
                return copy.deepcopy(order)
        return None

    def tracking_code_exists(self, tracking_code: str) -> bool:
        return any(o.tracking_code == tracking_code for o in self._store.values())

    def list(self, criteria: OrderFilter) -> list[Order]:
        result = []
        for order in sorted(self._store.values(), key=lambda o: o.id, reverse=True):
            if order.deleted_at is not None:
                continue
            if criteria.status is not None and order.status is not criteria.status:
                continue
            if (criteria.payment_status is not None
                    and order.payment_status is not criteria.payment_status):
                continue
            if criteria.customer_id is not None and order.customer_id != criteria.customer_id:
                continue
            if criteria.search and criteria.search.upper() not in order.tracking_code:
                continue
            result.append(copy.deepcopy(order))
        return result[: criteria.limit]

    def list_for_customer(
        self, customer_id: int, include_deleted: bool = False
    ) -> list[Order]:
        return [
            copy.deepcopy(o)
            for o in sorted(self._store.values(), key=lambda o: o.id)
            if o.customer_id == customer_id
            and (include_deleted or o.deleted_at is None)
        ]

    def save(self, order: Order) -> None:
        self._assign_id(order)
        self._store[order.id] = copy.deepcopy(order)


class FakeCustomerRepository(_InMemory, CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        super().__init__()
        for c in customers or []:
            self.save(c)

    def get_by_id(self, customer_id: int) -> Customer | None:
        return copy.deepcopy(self._store.get(customer_id))

    def get_for_update(self, customer_id: int) -> Customer | None:
        return self.get_by_id(customer_id)

    def get_by_phone(self, phone: str) -> Customer | None:
        for c in self._store.values():
            if c.phone == phone:
                return copy.deepcopy(c)
        return None

    def list_all(self) -> list[Customer]:
        return [copy.deepcopy(c) for c in self._store.values()]

    def save(self, customer: Customer) -> None:
        self._assign_id(customer)
        self._store[customer.id] = copy.deepcopy(customer)


class FakeServiceRepository(_InMemory, ServiceRepository):

    def __init__(self, services: list[Service] | None = None) -> None:
        super().__init__()
        for s in services or []:
            self.save(s)

    def get_by_id(self, service_id: int) -> Service | None:
        return copy.deepcopy(self._store.get(service_id))

    def get_by_code(self, code: str) -> Service | None:
        for s in self._store.values():
            if s.code == code:
                return copy.deepcopy(s)
        return None

    def list_all(self) -> list[Service]:
        return [copy.deepcopy(s) for s in self._store.values()]

    def save(self, service: Service) -> None:
        self._assign_id(service)
        self._store[service.id] = copy.deepcopy(service)


class FakeMaterialRepository(_InMemory, MaterialRepository):
    """Records the order in which materials are locked."""

    def __init__(self, materials: list[Material] | None = None) -> None:
        super().__init__()
        self.lock_log: list[int] = []
        for m in materials or []:
            self.save(m)

    def get_by_id(self, material_id: int) -> Material | None:
        return copy.deepcopy(self._store.get(material_id))

    def get_for_update(self, material_id: int) -> Material | None:
        self.lock_log.append(material_id)
        return self.get_by_id(material_id)

    def get_by_sku(self, sku: str) -> Material | None:
        for m in self._store.values():
            if m.sku == sku:
                return copy.deepcopy(m)
        return None

    def list_all(self) -> list[Material]:
        return [copy.deepcopy(m) for m in sorted(self._store.values(), key=lambda m: m.name)]

    def save(self, material: Material) -> None:
        self._assign_id(material)
        self._store[material.id] = copy.deepcopy(material)


class FakeStockMovementRepository(_InMemory, StockMovementRepository):

    def add(self, movement: StockMovement) -> StockMovement:
        stored = replace(movement, id=self._next_id)
        self._next_id += 1
        self._store[stored.id] = stored
        return stored

    def list_for_order(
        self, order_id: int, movement_type: StockMovementType | None = None
    ) -> list[StockMovement]:
        return [
            m for m in sorted(self._store.values(), key=lambda m: m.id)
            if m.order_id == order_id and (movement_type is None or m.type is movement_type)
        ]

    def list_for_material(self, material_id: int, limit: int = 50) -> list[StockMovement]:
        movements = [
            m for m in sorted(self._store.values(), key=lambda m: m.id, reverse=True)
            if m.material_id == material_id
        ]
        return movements[:limit]

    def all(self) -> list[StockMovement]:
        return sorted(self._store.values(), key=lambda m: m.id)


class FakeOrderHistoryRepository(_InMemory, OrderHistoryRepository):

    def add(self, entry: OrderHistory) -> OrderHistory:
        self._assign_id(entry)
        self._store[entry.id] = copy.deepcopy(entry)
        return entry

    def list_for_order(self, order_id: int) -> list[OrderHistory]:
        return [
            copy.deepcopy(h) for h in sorted(self._store.values(), key=lambda h: h.id)
            if h.order_id == order_id
        ]

    def get_by_id(self, history_id: int) -> OrderHistory | None:
        return copy.deepcopy(self._store.get(history_id))

    def save_notification(self, entry: OrderHistory) -> None:
        stored = self._store[entry.id]
        stored.notification_sent = entry.notification_sent
        stored.notification_sent_at = entry.notification_sent_at


class FakeUnitOfWork(UnitOfWork):

    def __init__(
        self,
        services: list[Service] | None = None,
        materials: list[Material] | None = None,
        customers: list[Customer] | None = None,
    ) -> None:
        self.orders = FakeOrderRepository()
        self.customers = FakeCustomerRepository(customers)
        self.services = FakeServiceRepository(services)
        self.materials = FakeMaterialRepository(materials)
        self.movements = FakeStockMovementRepository()
        self.histories = FakeOrderHistoryRepository()
        self.commits = 0
        self._snapshot: dict | None = None

    def _repos(self) -> dict[str, _InMemory]:
        return {
            "orders": self.orders,
            "customers": self.customers,
            "services": self.services,
            "materials": self.materials,
            "movements": self.movements,
            "histories": self.histories,
        }

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = {name: repo.snapshot() for name, repo in self._repos().items()}
        return self

    def commit(self) -> None:
        self.commits += 1
        self._snapshot = {name: repo.snapshot() for name, repo in self._repos().items()}

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        for name, repo in self._repos().items():
            repo.restore(self._snapshot[name])


# --- Seed data ----------------------------------------------------------------

DETERJEN, PEWANGI, PLASTIK = 1, 2, 3
CUCI_KERING, CUCI_SETRIKA, SETRIKA_SAJA, BED_COVER = 1, 2, 3, 4


def seeded_uow(
    deterjen: str = "5000",
    pewangi: str = "2000",
    plastik: str = "100",
) -> FakeUnitOfWork:
    """A shop with three materials and four services.

    Materials (IDs 1-3): Deterjen (ml), Pewangi (ml), Plastik (pcs).
    Services (IDs 1-4):
      CK  Cuci Kering   7000/kg, express x1.5, 100 ml Deterjen per kg
      CS  Cuci Setrika 10000/kg, 100 ml Deterjen + 30 ml Pewangi per kg
      SS  Setrika Saja  5000/kg, no recipe
      BC  Bed Cover    25000/pcs, 200 Deterjen + 50 Pewangi + 1 Plastik per pcs
    """
    materials = [
        Material(None, "Deterjen", "DET-01", "ml", Decimal(deterjen), Decimal("1000")),
        Material(None, "Pewangi", "PWG-01", "ml", Decimal(pewangi), Decimal("500")),
        Material(None, "Plastik", "PLS-01", "pcs", Decimal(plastik), Decimal("20")),
    ]
    services = [
        Service(None, "CK", "Cuci Kering", Money.of("7000"), UnitType.KG,
                is_express_available=True,
                recipe=[ServiceMaterial(DETERJEN, Decimal("100"))]),
        Service(None, "CS", "Cuci Setrika", Money.of("10000"), UnitType.KG,
                recipe=[ServiceMaterial(DETERJEN, Decimal("100")),
                        ServiceMaterial(PEWANGI, Decimal("30"))]),
        Service(None, "SS", "Setrika Saja", Money.of("5000"), UnitType.KG),
        Service(None, "BC", "Bed Cover", Money.of("25000"), UnitType.PCS,
                recipe=[ServiceMaterial(DETERJEN, Decimal("200")),
                        ServiceMaterial(PEWANGI, Decimal("50")),
                        ServiceMaterial(PLASTIK, Decimal("1"))]),
    ]
    return FakeUnitOfWork(services=services, materials=materials)
