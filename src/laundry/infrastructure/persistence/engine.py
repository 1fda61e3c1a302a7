"""SQLAlchemy engine and session factory.

SQLite and PostgreSQL are supported.  On PostgreSQL every connection gets
a ``lock_timeout`` so a row lock that cannot be taken fails instead of
waiting forever.  SQLite ignores FOR UPDATE, so every transaction there
starts with BEGIN IMMEDIATE: the database write lock is taken before the
first read and a second writer waits at most ``busy_timeout``.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from laundry.infrastructure.config import Settings
from laundry.infrastructure.persistence.orm import Base
from laundry.logging_config import get_logger

logger = get_logger("db.engine")


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def init_engine(settings: Settings) -> Engine:
    """Create an engine for ``settings.database_url``."""
    url = settings.database_url
    kwargs: dict = {"echo": settings.sql_echo}

    if settings.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            # One shared connection, or every session sees an empty database
            kwargs["poolclass"] = StaticPool
        path = settings.sqlite_path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
    elif url.startswith("postgresql"):
        kwargs["pool_pre_ping"] = True
        kwargs["connect_args"] = {
            "options": f"-c lock_timeout={settings.lock_timeout_ms}"
        }

    engine = create_engine(url, **kwargs)

    if settings.is_sqlite:
        @event.listens_for(engine, "connect")
        def _configure_sqlite(dbapi_conn, _record) -> None:
            # Let the "begin" hook below issue BEGIN instead of pysqlite
            dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute(f"PRAGMA busy_timeout={settings.lock_timeout_ms}")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn) -> None:
            # Take the write lock up front; SQLite has no FOR UPDATE
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    logger.info(
        "engine_initialized",
        extra={
            "dialect": engine.dialect.name,
            "lock_timeout_ms": settings.lock_timeout_ms,
            "echo": settings.sql_echo,
        },
    )
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    Base.metadata.create_all(engine)
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


def drop_tables(engine: Engine) -> None:
    Base.metadata.drop_all(engine)
