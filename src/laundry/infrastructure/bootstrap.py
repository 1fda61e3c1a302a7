"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from laundry.infrastructure.config import Settings
from laundry.infrastructure.persistence.engine import init_engine, session_factory
from laundry.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from laundry.logging_config import configure_logging

_settings: Settings | None = None
_engine: Engine | None = None
_sessions: sessionmaker[Session] | None = None


def settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def engine() -> Engine:
    global _engine, _sessions
    if _engine is None:
        current = settings()
        configure_logging(level=current.log_level)
        _engine = init_engine(current)
        _sessions = session_factory(_engine)
    return _engine


def unit_of_work() -> SqlAlchemyUnitOfWork:
    engine()
    return SqlAlchemyUnitOfWork(_sessions)  # type: ignore[arg-type]


def configure(new_settings: Settings) -> None:
    """Replace the settings and drop the engine built from the old ones."""
    global _settings, _engine, _sessions
    if _engine is not None:
        _engine.dispose()
    _settings = new_settings
    _engine = None
    _sessions = None
