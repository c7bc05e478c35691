"""Domain service: Capacity Ledger.

The ledger is the only writer of ``TimeSlot.used_capacity`` and
``TimeSlot.status``.  Both operations move the counter by exactly one
unit through an atomic update at the storage layer; callers guarantee at
most one ``reserve`` per order-slot assignment and at most one
``release`` per cancellation.
"""

from __future__ import annotations

import logging

from palette_oms.domain.exceptions import EntityNotFoundError, SlotFullError
from palette_oms.domain.model.time_slot import TimeSlot
from palette_oms.domain.repository.time_slot_repository import TimeSlotRepository

logger = logging.getLogger(__name__)


class CapacityLedger:

    def __init__(self, time_slot_repo: TimeSlotRepository) -> None:
        self._time_slot_repo = time_slot_repo

    def reserve(self, slot_id: int) -> TimeSlot:
        """Take one unit of *slot_id*'s capacity.

        Raises SlotFullError when no unit is left, EntityNotFoundError when
        the slot does not exist.
        """
        slot = self._time_slot_repo.increment_usage(slot_id)
        if slot is None:
            existing = self._time_slot_repo.get_by_id(slot_id)
            if existing is None:
                raise EntityNotFoundError(f"Time slot #{slot_id} not found")
            raise SlotFullError(
                f"Time slot #{slot_id} is full "
                f"({existing.used_capacity}/{existing.capacity})"
            )
        logger.info(
            f"Reserved slot #{slot_id}: {slot.used_capacity}/{slot.capacity} ({slot.status.value})"
        )
        return slot

    def release(self, slot_id: int) -> TimeSlot:
        """Give back one unit of *slot_id*'s capacity (never below zero)."""
        slot = self._time_slot_repo.decrement_usage(slot_id)
        if slot is None:
            raise EntityNotFoundError(f"Time slot #{slot_id} not found")
        logger.info(
            f"Released slot #{slot_id}: {slot.used_capacity}/{slot.capacity} ({slot.status.value})"
        )
        return slot
