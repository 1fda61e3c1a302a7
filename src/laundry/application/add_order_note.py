"""Application service: Add Order Note and Mark Notification Sent use cases."""

from __future__ import annotations

from laundry.application.dto import OrderHistoryDTO, history_to_dto
from laundry.application.order_lifecycle import OrderLifecycle
from laundry.domain.exceptions import EntityNotFoundError, ValidationError
from laundry.domain.model.history import HistoryAction
from laundry.domain.repository.unit_of_work import UnitOfWork


class AddOrderNoteHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, note: str, actor_id: int | None = None) -> OrderHistoryDTO:
        if not note or not note.strip():
            raise ValidationError("Note text is required")
        with self._uow as uow:
            lifecycle = OrderLifecycle(uow)
            order = lifecycle.lock_order(order_id)
            entry = lifecycle.record(
                order, HistoryAction.NOTE, note.strip(), actor_id,
            )
            uow.commit()
        return history_to_dto(entry)


class MarkNotificationSentHandler:
    """Flag a history entry as notified. The only edit history allows."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, history_id: int) -> OrderHistoryDTO:
        with self._uow as uow:
            entry = uow.histories.get_by_id(history_id)
            if entry is None:
                raise EntityNotFoundError(f"History entry #{history_id} not found")
            if not entry.notification_sent:
                entry.mark_notification_sent()
                uow.histories.save_notification(entry)
            uow.commit()
        return history_to_dto(entry)
