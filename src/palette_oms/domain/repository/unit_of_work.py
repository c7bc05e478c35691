"""Abstract Unit of Work.

One unit of work is one transaction: every repository reached through it
shares the transaction, ``commit()`` makes the work durable, and leaving
the ``with`` block without committing rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from palette_oms.domain.repository.customer_repository import CustomerRepository
from palette_oms.domain.repository.order_repository import OrderRepository
from palette_oms.domain.repository.palette_type_repository import (
    PaletteTypeRepository,
)
from palette_oms.domain.repository.time_slot_repository import TimeSlotRepository


class UnitOfWork(ABC):

    customers: CustomerRepository
    palette_types: PaletteTypeRepository
    time_slots: TimeSlotRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make all work done so far durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted work.  A no-op after ``commit()``."""

    @abstractmethod
    def savepoint(self) -> AbstractContextManager[None]:
        """Nested scope whose work is undone alone if the block raises."""
