"""Domain service: Slot Generator.

Lays out the fixed daily grid of delivery windows: ten one-hour slots
from 08:00 to 18:00 for every day of a forward-looking window.
"""

from __future__ import annotations

from datetime import date, time, timedelta

from palette_oms.domain.exceptions import ValidationError
from palette_oms.domain.model.time_slot import TimeSlot

FIRST_HOUR = 8
LAST_HOUR = 18  # exclusive: the last slot is 17:00-18:00


def daily_buckets() -> list[tuple[time, time]]:
    return [(time(hour), time(hour + 1)) for hour in range(FIRST_HOUR, LAST_HOUR)]


class SlotGenerator:

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValidationError("Slot capacity must be positive")
        self._capacity = capacity

    def build(self, start_date: date, days_ahead: int) -> list[TimeSlot]:
        """Build (without persisting) every slot of ``[start_date, start_date + days_ahead)``."""
        if days_ahead < 1:
            raise ValidationError("days_ahead must be at least 1")

        slots: list[TimeSlot] = []
        for offset in range(days_ahead):
            day = start_date + timedelta(days=offset)
            for start, end in daily_buckets():
                slots.append(
                    TimeSlot(
                        id=None,
                        date=day,
                        start_time=start,
                        end_time=end,
                        capacity=self._capacity,
                    )
                )
        return slots
