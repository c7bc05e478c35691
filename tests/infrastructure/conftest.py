"""Shared fixtures for tests that hit a real SQLite database."""

from datetime import date, time
from decimal import Decimal

import pytest

from palette_oms.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from palette_oms.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from palette_oms.infrastructure.persistence.tables import PaletteTypeRow, TimeSlotRow


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """File-backed database, needed when several connections write at once."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'oms.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def make_uow(session_factory):
    return lambda: SqlUnitOfWork(session_factory)


def _seed(session_factory, capacity: int = 2) -> None:
    """Two palette types and one slot on 2025-03-01 10:00."""
    with session_factory() as session:
        session.add_all([
            PaletteTypeRow(id=1, name="Europe", price=Decimal("12.50")),
            PaletteTypeRow(id=2, name="Half"),
            TimeSlotRow(
                id=1,
                date=date(2025, 3, 1),
                start_time=time(10),
                end_time=time(11),
                capacity=capacity,
                used_capacity=0,
                status="available",
            ),
        ])
        session.commit()


@pytest.fixture
def seed_db():
    return _seed


@pytest.fixture
def seeded(session_factory):
    _seed(session_factory)
    return session_factory
