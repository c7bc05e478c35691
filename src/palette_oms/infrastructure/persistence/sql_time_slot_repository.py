"""SQLAlchemy-backed implementation of TimeSlotRepository.

Usage counters are only ever changed by single UPDATE statements whose
arithmetic runs inside the database, so concurrent reservations against
the same slot cannot lose updates or push it past its capacity.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from palette_oms.domain.model.time_slot import SlotStatus, TimeSlot
from palette_oms.domain.repository.time_slot_repository import TimeSlotRepository
from palette_oms.infrastructure.persistence.database import insert_or_skip
from palette_oms.infrastructure.persistence.tables import TimeSlotRow


class SqlTimeSlotRepository(TimeSlotRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- TimeSlotRepository interface -----------------------------------------

    def get_by_id(self, slot_id: int) -> TimeSlot | None:
        # populate_existing: counters may have moved under a bulk UPDATE
        row = self._session.get(TimeSlotRow, slot_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_available(self, from_date: date) -> list[TimeSlot]:
        rows = self._session.scalars(
            select(TimeSlotRow)
            .where(
                TimeSlotRow.status == SlotStatus.AVAILABLE.value,
                TimeSlotRow.date >= from_date,
            )
            .order_by(TimeSlotRow.date, TimeSlotRow.start_time)
        )
        return [self._to_domain(row) for row in rows]

    def add_missing(self, slots: list[TimeSlot]) -> int:
        created = 0
        for slot in slots:
            created += insert_or_skip(
                self._session,
                TimeSlotRow,
                self._to_values(slot),
                conflict_columns=["date", "start_time"],
            )
        return created

    def increment_usage(self, slot_id: int) -> TimeSlot | None:
        stmt = (
            update(TimeSlotRow)
            .where(
                TimeSlotRow.id == slot_id,
                TimeSlotRow.used_capacity < TimeSlotRow.capacity,
            )
            .values(
                used_capacity=TimeSlotRow.used_capacity + 1,
                status=case(
                    (TimeSlotRow.used_capacity + 1 >= TimeSlotRow.capacity, SlotStatus.FULL.value),
                    else_=TimeSlotRow.status,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        if self._session.execute(stmt).rowcount == 0:
            return None
        return self.get_by_id(slot_id)

    def decrement_usage(self, slot_id: int) -> TimeSlot | None:
        new_used = case(
            (TimeSlotRow.used_capacity > 0, TimeSlotRow.used_capacity - 1),
            else_=0,
        )
        stmt = (
            update(TimeSlotRow)
            .where(TimeSlotRow.id == slot_id)
            .values(
                used_capacity=new_used,
                status=case(
                    (new_used < TimeSlotRow.capacity, SlotStatus.AVAILABLE.value),
                    else_=TimeSlotRow.status,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        if self._session.execute(stmt).rowcount == 0:
            return None
        return self.get_by_id(slot_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_values(slot: TimeSlot) -> dict:
        return {
            "date": slot.date,
            "start_time": slot.start_time,
            "end_time": slot.end_time,
            "capacity": slot.capacity,
            "used_capacity": slot.used_capacity,
            "status": slot.status.value,
        }

    @staticmethod
    def _to_domain(row: TimeSlotRow) -> TimeSlot:
        return TimeSlot(
            id=row.id,
            date=row.date,
            start_time=row.start_time,
            end_time=row.end_time,
            capacity=row.capacity,
            used_capacity=row.used_capacity,
            status=SlotStatus(row.status),
        )
