import logging
from decimal import Decimal

import pytest

from laundry.domain.model.material import Material
from laundry.domain.model.service import Service, ServiceMaterial, UnitType
from laundry.domain.model.value_objects import Money
from laundry.infrastructure.config import Settings
from laundry.infrastructure.persistence.engine import (
    create_tables,
    init_engine,
    session_factory,
)
from laundry.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from laundry.logging_config import configure_logging, reset_logging


def _seeded(sessions):
    """Seed a shop and return a unit of work over it.

    Materials: 1 Deterjen (5000 ml), 2 Pewangi (2000 ml).
    Services:  1 CK 7000/kg (100 Deterjen), 2 CS 10000/kg (100 Deterjen + 30 Pewangi).
    """
    seeded = SqlAlchemyUnitOfWork(sessions)
    with seeded as u:
        u.materials.save(Material(None, "Deterjen", "DET-01", "ml",
                                  Decimal("5000"), Decimal("1000")))
        u.materials.save(Material(None, "Pewangi", "PWG-01", "ml",
                                  Decimal("2000"), Decimal("500")))
        u.services.save(Service(None, "CK", "Cuci Kering", Money.of("7000"), UnitType.KG,
                                is_express_available=True,
                                recipe=[ServiceMaterial(1, Decimal("100"))]))
        u.services.save(Service(None, "CS", "Cuci Setrika", Money.of("10000"), UnitType.KG,
                                recipe=[ServiceMaterial(1, Decimal("100")),
                                        ServiceMaterial(2, Decimal("30"))]))
        u.commit()
    return seeded


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(level=logging.WARNING, handler=logging.NullHandler())
    yield
    reset_logging()


@pytest.fixture
def sessions():
    engine = init_engine(Settings(database_url="sqlite://"))
    create_tables(engine)
    yield session_factory(engine)
    engine.dispose()


@pytest.fixture
def uow(sessions):
    return _seeded(sessions)


@pytest.fixture
def file_sessions(tmp_path):
    """Sessions over a file database, one connection each, short lock wait."""
    engine = init_engine(
        Settings(database_url=f"sqlite:///{tmp_path / 'shop.db'}", lock_timeout_ms=200)
    )
    create_tables(engine)
    _seeded(session_factory(engine))
    yield session_factory(engine)
    engine.dispose()
