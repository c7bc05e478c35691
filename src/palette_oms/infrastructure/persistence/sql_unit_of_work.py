"""SQLAlchemy implementation of the Unit of Work.

Every storage failure leaves this module as a PersistenceError, so the
application and adapter layers never see SQLAlchemy exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from palette_oms.domain.exceptions import PersistenceError
from palette_oms.domain.repository.unit_of_work import UnitOfWork
from palette_oms.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from palette_oms.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from palette_oms.infrastructure.persistence.sql_palette_type_repository import (
    SqlPaletteTypeRepository,
)
from palette_oms.infrastructure.persistence.sql_time_slot_repository import (
    SqlTimeSlotRepository,
)

logger = logging.getLogger(__name__)


def _describe(exc: SQLAlchemyError) -> str:
    return str(getattr(exc, "orig", None) or exc)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.customers = SqlCustomerRepository(self._session)
        self.palette_types = SqlPaletteTypeRepository(self._session)
        self.time_slots = SqlTimeSlotRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Database error, transaction rolled back: {_describe(exc)}")
            raise PersistenceError(_describe(exc)) from exc

    def commit(self) -> None:
        try:
            self._session.commit()  # type: ignore[union-attr]
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed: {_describe(exc)}")
            raise PersistenceError(_describe(exc)) from exc

    def rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        nested = self._session.begin_nested()  # type: ignore[union-attr]
        try:
            yield
        except SQLAlchemyError as exc:
            nested.rollback()
            raise PersistenceError(_describe(exc)) from exc
        except Exception:
            nested.rollback()
            raise
        else:
            nested.commit()
