"""SQLAlchemy implementation of OrderRepository.

Items are rewritten as a whole on every save; they are a value list
owned by the order.  Soft-deleted orders are filtered out of every
lookup except ``tracking_code_exists``.
"""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from laundry.domain.model.order import Order, OrderItem
from laundry.domain.model.order_status import OrderStatus, PaymentMethod, PaymentStatus
from laundry.domain.model.value_objects import Money, Quantity
from laundry.domain.repository.order_repository import OrderFilter, OrderRepository
from laundry.infrastructure.persistence.orm import CustomerRow, OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def _live(self):
        return (
            select(OrderRow)
            .where(OrderRow.deleted_at.is_(None))
            .options(selectinload(OrderRow.items))
        )

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.execute(
            self._live().where(OrderRow.id == order_id)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_for_update(self, order_id: int) -> Order | None:
        row = self._session.execute(
            self._live()
            .where(OrderRow.id == order_id)
            .with_for_update(of=OrderRow)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_by_tracking_code(self, tracking_code: str) -> Order | None:
        row = self._session.execute(
            self._live().where(OrderRow.tracking_code == tracking_code)
        ).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def tracking_code_exists(self, tracking_code: str) -> bool:
        found = self._session.execute(
            select(OrderRow.id).where(OrderRow.tracking_code == tracking_code)
        ).first()
        return found is not None

    def list(self, criteria: OrderFilter) -> list[Order]:
        stmt = self._live()
        if criteria.status is not None:
            stmt = stmt.where(OrderRow.status == criteria.status.value)
        if criteria.payment_status is not None:
            stmt = stmt.where(OrderRow.payment_status == criteria.payment_status.value)
        if criteria.customer_id is not None:
            stmt = stmt.where(OrderRow.customer_id == criteria.customer_id)
        if criteria.search:
            pattern = f"%{criteria.search.strip()}%"
            stmt = stmt.join(CustomerRow, CustomerRow.id == OrderRow.customer_id).where(
                or_(
                    OrderRow.tracking_code.ilike(pattern),
                    CustomerRow.name.ilike(pattern),
                    CustomerRow.phone.ilike(pattern),
                )
            )
        stmt = stmt.order_by(OrderRow.created_at.desc(), OrderRow.id.desc()).limit(
            criteria.limit
        )
        return [self._to_domain(r) for r in self._session.execute(stmt).scalars()]

    def list_for_customer(
        self, customer_id: int, include_deleted: bool = False
    ) -> list[Order]:
        if include_deleted:
            stmt = select(OrderRow).options(selectinload(OrderRow.items))
        else:
            stmt = self._live()
        rows = self._session.execute(
            stmt.where(OrderRow.customer_id == customer_id).order_by(OrderRow.id)
        ).scalars()
        return [self._to_domain(r) for r in rows]

    def save(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id) if order.id else None
        if row is None:
            row = OrderRow()
            self._session.add(row)
        self._to_row(order, row)
        self._session.flush()
        order.id = row.id

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order, row: OrderRow) -> None:
        row.tracking_code = order.tracking_code
        row.customer_id = order.customer_id
        row.status = order.status.value
        row.payment_status = order.payment_status.value
        row.payment_method = order.payment_method.value if order.payment_method else None
        row.total_price = order.total_price.amount
        row.discount_amount = order.discount_amount.amount
        row.final_price = order.final_price.amount
        row.points_earned = order.points_earned
        row.points_used = order.points_used
        row.pickup_date = order.pickup_date
        row.customer_notes = order.customer_notes
        row.internal_notes = order.internal_notes
        row.created_by = order.created_by
        row.updated_by = order.updated_by
        row.created_at = order.created_at
        row.deleted_at = order.deleted_at
        row.items = [
            OrderItemRow(
                position=position,
                service_id=item.service_id,
                service_name=item.service_name,
                qty=item.qty.value,
                price_at_moment=item.price_at_moment.amount,
                subtotal=item.subtotal.amount,
                is_express=item.is_express,
                express_multiplier=item.express_multiplier,
                notes=item.notes,
            )
            for position, item in enumerate(order.items)
        ]

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            tracking_code=row.tracking_code,
            customer_id=row.customer_id,
            items=[
                OrderItem(
                    service_id=i.service_id,
                    service_name=i.service_name,
                    qty=Quantity(i.qty),
                    price_at_moment=Money(i.price_at_moment),
                    subtotal=Money(i.subtotal),
                    is_express=i.is_express,
                    express_multiplier=i.express_multiplier,
                    notes=i.notes,
                )
                for i in row.items
            ],
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            payment_method=PaymentMethod(row.payment_method) if row.payment_method else None,
            discount_amount=Money(row.discount_amount),
            points_earned=row.points_earned,
            points_used=row.points_used,
            pickup_date=row.pickup_date,
            customer_notes=row.customer_notes,
            internal_notes=row.internal_notes,
            created_by=row.created_by,
            updated_by=row.updated_by,
            created_at=row.created_at,
            deleted_at=row.deleted_at,
        )
