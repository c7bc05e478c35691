"""Unit tests for the TimeSlot aggregate."""

from datetime import date, time

import pytest

from palette_oms.domain.exceptions import SlotFullError, ValidationError
from palette_oms.domain.model.time_slot import SlotStatus, TimeSlot


def _slot(capacity: int = 2, used: int = 0) -> TimeSlot:
    return TimeSlot(
        id=1,
        date=date(2025, 3, 1),
        start_time=time(8),
        end_time=time(9),
        capacity=capacity,
        used_capacity=used,
        status=SlotStatus.FULL if used >= capacity else SlotStatus.AVAILABLE,
    )


class TestTimeSlotInvariants:

    def test_used_above_capacity_rejected(self):
        with pytest.raises(ValidationError, match="outside 0..2"):
            _slot(capacity=2, used=3)

    def test_negative_used_rejected(self):
        with pytest.raises(ValidationError):
            _slot(used=-1)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="end after it starts"):
            TimeSlot(id=None, date=date(2025, 3, 1), start_time=time(9), end_time=time(8), capacity=1)


class TestReserve:

    def test_reserve_increments(self):
        slot = _slot(capacity=2)
        slot.reserve()
        assert slot.used_capacity == 1
        assert slot.status == SlotStatus.AVAILABLE
        assert slot.remaining_capacity == 1

    def test_last_unit_flips_to_full(self):
        slot = _slot(capacity=2, used=1)
        slot.reserve()
        assert slot.used_capacity == 2
        assert slot.status == SlotStatus.FULL
        assert slot.is_full

    def test_reserve_full_raises(self):
        slot = _slot(capacity=2, used=2)
        with pytest.raises(SlotFullError, match="2/2"):
            slot.reserve()
        assert slot.used_capacity == 2


class TestRelease:

    def test_release_reopens_full_slot(self):
        slot = _slot(capacity=2, used=2)
        slot.release()
        assert slot.used_capacity == 1
        assert slot.status == SlotStatus.AVAILABLE

    def test_release_floors_at_zero(self):
        slot = _slot(capacity=2, used=0)
        slot.release()
        assert slot.used_capacity == 0
        assert slot.status == SlotStatus.AVAILABLE
