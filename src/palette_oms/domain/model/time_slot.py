"""TimeSlot aggregate: a one-hour delivery window with bounded capacity.

Each slot counts how many orders currently hold it.  Capacity is counted
per order, not per palette: one order occupies exactly one unit whatever
its item quantities.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from palette_oms.domain.exceptions import SlotFullError, ValidationError


class SlotStatus(Enum):
    AVAILABLE = "available"
    FULL = "full"


@dataclass
class TimeSlot:
    """Aggregate root for slot capacity.

    Invariants:
    - ``0 <= used_capacity <= capacity``
    - ``status`` is FULL iff ``used_capacity >= capacity``

    The in-place ``reserve``/``release`` methods define the arithmetic.
    Persistent stores must apply the same arithmetic as a single atomic
    update (see ``TimeSlotRepository``).
    """

    id: int | None
    date: date
    start_time: time
    end_time: time
    capacity: int
    used_capacity: int = 0
    status: SlotStatus = SlotStatus.AVAILABLE

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValidationError("Slot capacity cannot be negative")
        if not 0 <= self.used_capacity <= self.capacity:
            raise ValidationError(
                f"Used capacity {self.used_capacity} outside 0..{self.capacity}"
            )
        if self.end_time <= self.start_time:
            raise ValidationError("Slot must end after it starts")

    @property
    def remaining_capacity(self) -> int:
        return self.capacity - self.used_capacity

    @property
    def is_full(self) -> bool:
        return self.used_capacity >= self.capacity

    def reserve(self) -> None:
        """Take one unit of capacity, flipping to FULL on the last one."""
        if self.is_full:
            raise SlotFullError(
                f"Slot {self.date} {self.start_time:%H:%M} is full "
                f"({self.used_capacity}/{self.capacity})"
            )
        self.used_capacity += 1
        if self.used_capacity >= self.capacity:
            self.status = SlotStatus.FULL

    def release(self) -> None:
        """Give back one unit of capacity, floored at zero."""
        self.used_capacity = max(self.used_capacity - 1, 0)
        if self.used_capacity < self.capacity:
            self.status = SlotStatus.AVAILABLE
