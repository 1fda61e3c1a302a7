"""SQLAlchemy unit of work: one session and one transaction per use case."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from laundry.domain.exceptions import LockTimeoutError
from laundry.domain.repository.unit_of_work import UnitOfWork
from laundry.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from laundry.infrastructure.persistence.sql_history_repository import (
    SqlOrderHistoryRepository,
)
from laundry.infrastructure.persistence.sql_material_repository import (
    SqlMaterialRepository,
)
from laundry.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from laundry.infrastructure.persistence.sql_service_repository import (
    SqlServiceRepository,
)
from laundry.infrastructure.persistence.sql_stock_movement_repository import (
    SqlStockMovementRepository,
)
from laundry.logging_config import get_logger

logger = get_logger("db.unit_of_work")

# PostgreSQL lock_not_available
_LOCK_NOT_AVAILABLE = "55P03"


def is_lock_timeout(exc: OperationalError) -> bool:
    if getattr(exc.orig, "pgcode", None) == _LOCK_NOT_AVAILABLE:
        return True
    message = str(exc.orig).lower()
    return "lock timeout" in message or "database is locked" in message


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.orders = SqlOrderRepository(self._session)
        self.customers = SqlCustomerRepository(self._session)
        self.services = SqlServiceRepository(self._session)
        self.materials = SqlMaterialRepository(self._session)
        self.movements = SqlStockMovementRepository(self._session)
        self.histories = SqlOrderHistoryRepository(self._session)
        logger.debug("transaction_started")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc is not None:
                logger.warning(
                    "transaction_rolled_back",
                    extra={"reason": type(exc).__name__},
                )
            self.rollback()
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

        if isinstance(exc, OperationalError) and is_lock_timeout(exc):
            logger.warning("lock_timeout", extra={"error": str(exc.orig)})
            raise LockTimeoutError(
                "Another transaction holds the lock; try again"
            ) from exc

    def commit(self) -> None:
        self._require_session().commit()
        logger.debug("transaction_committed")

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside a 'with' block")
        return self._session
