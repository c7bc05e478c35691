"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from palette_oms.application.submit_order import SlotFailurePolicy
from palette_oms.infrastructure.config import Settings, get_settings
from palette_oms.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from palette_oms.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@lru_cache
def engine() -> Engine:
    settings = get_settings()
    return create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)


@lru_cache
def session_factory() -> sessionmaker:
    return create_session_factory(engine())


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(session_factory())


def slot_failure_policy(settings: Settings | None = None) -> SlotFailurePolicy:
    return SlotFailurePolicy((settings or get_settings()).SLOT_FAILURE_POLICY)
