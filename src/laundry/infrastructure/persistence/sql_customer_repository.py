"""SQLAlchemy implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.domain.model.customer import Customer
from laundry.domain.model.value_objects import Money
from laundry.domain.repository.customer_repository import CustomerRepository
from laundry.infrastructure.persistence.orm import CustomerRow


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, customer_id: int) -> Customer | None:
        row = self._session.get(CustomerRow, customer_id)
        return self._to_domain(row) if row else None

    def get_for_update(self, customer_id: int) -> Customer | None:
        row = self._session.execute(
            select(CustomerRow)
            .where(CustomerRow.id == customer_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_by_phone(self, phone: str) -> Customer | None:
        row = self._session.execute(
            select(CustomerRow).where(CustomerRow.phone == phone)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Customer]:
        rows = self._session.execute(select(CustomerRow).order_by(CustomerRow.id)).scalars()
        return [self._to_domain(r) for r in rows]

    def save(self, customer: Customer) -> None:
        row = self._session.get(CustomerRow, customer.id) if customer.id else None
        if row is None:
            row = CustomerRow()
            self._session.add(row)
        self._to_row(customer, row)
        self._session.flush()
        customer.id = row.id

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(customer: Customer, row: CustomerRow) -> None:
        row.name = customer.name
        row.phone = customer.phone
        row.email = customer.email
        row.address = customer.address
        row.notes = customer.notes
        row.total_points = customer.total_points
        row.total_orders = customer.total_orders
        row.total_spent = customer.total_spent.amount
        row.last_order_date = customer.last_order_date

    @staticmethod
    def _to_domain(row: CustomerRow) -> Customer:
        return Customer(
            id=row.id,
            name=row.name,
            phone=row.phone,
            email=row.email,
            address=row.address,
            notes=row.notes,
            total_points=row.total_points,
            total_orders=row.total_orders,
            total_spent=Money(row.total_spent),
            last_order_date=row.last_order_date,
        )
