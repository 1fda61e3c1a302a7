"""Order history: the append-only audit trail of an order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from laundry.domain.model.order_status import OrderStatus


class HistoryAction(Enum):
    CREATED = "CREATED"
    STATUS_CHANGE = "STATUS_CHANGE"
    PAYMENT = "PAYMENT"
    NOTE = "NOTE"
    UPDATED = "UPDATED"


@dataclass
class OrderHistory:
    """One audit entry.

    Entries are never edited once written; marking the notification as
    sent is the single permitted later mutation.
    """

    order_id: int
    status: OrderStatus
    action: HistoryAction
    previous_status: OrderStatus | None = None
    notes: str | None = None
    created_by: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    notification_sent: bool = False
    notification_sent_at: datetime | None = None
    id: int | None = None

    def mark_notification_sent(self, at: datetime | None = None) -> None:
        self.notification_sent = True
        self.notification_sent_at = at or datetime.now(timezone.utc)
