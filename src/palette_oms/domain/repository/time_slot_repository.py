"""Abstract repository for TimeSlot aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from palette_oms.domain.model.time_slot import TimeSlot


class TimeSlotRepository(ABC):

    @abstractmethod
    def get_by_id(self, slot_id: int) -> TimeSlot | None:
        """Return a slot by its ID, or None if not found."""

    @abstractmethod
    def list_available(self, from_date: date) -> list[TimeSlot]:
        """Return available slots on or after *from_date*, by date then time."""

    @abstractmethod
    def add_missing(self, slots: list[TimeSlot]) -> int:
        """Insert the slots whose (date, start_time) is not stored yet.

        Returns the number of slots actually inserted.
        """

    @abstractmethod
    def increment_usage(self, slot_id: int) -> TimeSlot | None:
        """Atomically take one unit of capacity.

        Must run as one conditional update evaluated by the store:
        ``used_capacity + 1`` only where ``used_capacity < capacity``,
        flipping status to full when the new value reaches capacity.
        Returns the updated slot, or None when no row matched (missing
        or already full).
        """

    @abstractmethod
    def decrement_usage(self, slot_id: int) -> TimeSlot | None:
        """Atomically give back one unit of capacity, floored at zero.

        Status becomes available when the new value is below capacity.
        Returns the updated slot, or None when the slot does not exist.
        """
