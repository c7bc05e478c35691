"""Application service: Generate Slots use case.

Re-running over an overlapping window is safe: slots already present for
a (date, start time) pair are skipped, and only new ones are counted.
"""

from __future__ import annotations

import logging
from datetime import date

from palette_oms.domain.repository.unit_of_work import UnitOfWork
from palette_oms.domain.service.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class GenerateSlotsHandler:

    def __init__(self, uow: UnitOfWork, capacity: int) -> None:
        self._uow = uow
        self._generator = SlotGenerator(capacity)

    def handle(self, start_date: date, days_ahead: int) -> int:
        slots = self._generator.build(start_date, days_ahead)

        with self._uow as uow:
            created = uow.time_slots.add_missing(slots)
            uow.commit()

        logger.info(
            f"Generated {created} new slot(s) for {days_ahead} day(s) from {start_date} "
            f"({len(slots) - created} already present)"
        )
        return created
