"""SQLAlchemy implementation of the order history (audit trail)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.domain.exceptions import EntityNotFoundError
from laundry.domain.model.history import HistoryAction, OrderHistory
from laundry.domain.model.order_status import OrderStatus
from laundry.domain.repository.history_repository import OrderHistoryRepository
from laundry.infrastructure.persistence.orm import OrderHistoryRow


class SqlOrderHistoryRepository(OrderHistoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, entry: OrderHistory) -> OrderHistory:
        row = OrderHistoryRow(
            order_id=entry.order_id,
            status=entry.status.value,
            previous_status=entry.previous_status.value if entry.previous_status else None,
            action=entry.action.value,
            notes=entry.notes,
            created_by=entry.created_by,
            created_at=entry.created_at,
            notification_sent=entry.notification_sent,
            notification_sent_at=entry.notification_sent_at,
        )
        self._session.add(row)
        self._session.flush()
        entry.id = row.id
        return entry

    def list_for_order(self, order_id: int) -> list[OrderHistory]:
        rows = self._session.execute(
            select(OrderHistoryRow)
            .where(OrderHistoryRow.order_id == order_id)
            .order_by(OrderHistoryRow.id)
        ).scalars()
        return [self._to_domain(r) for r in rows]

    def get_by_id(self, history_id: int) -> OrderHistory | None:
        row = self._session.get(OrderHistoryRow, history_id)
        return self._to_domain(row) if row else None

    def save_notification(self, entry: OrderHistory) -> None:
        row = self._session.get(OrderHistoryRow, entry.id)
        if row is None:
            raise EntityNotFoundError(f"History entry #{entry.id} not found")
        row.notification_sent = entry.notification_sent
        row.notification_sent_at = entry.notification_sent_at
        self._session.flush()

    @staticmethod
    def _to_domain(row: OrderHistoryRow) -> OrderHistory:
        return OrderHistory(
            id=row.id,
            order_id=row.order_id,
            status=OrderStatus(row.status),
            previous_status=OrderStatus(row.previous_status) if row.previous_status else None,
            action=HistoryAction(row.action),
            notes=row.notes,
            created_by=row.created_by,
            created_at=row.created_at,
            notification_sent=row.notification_sent,
            notification_sent_at=row.notification_sent_at,
        )
