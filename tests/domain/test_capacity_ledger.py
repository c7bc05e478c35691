"""Tests for the CapacityLedger domain service.

Uses the in-memory time slot repository.
"""

from datetime import date, time

import pytest

from palette_oms.domain.exceptions import EntityNotFoundError, SlotFullError
from palette_oms.domain.model.time_slot import SlotStatus, TimeSlot
from palette_oms.domain.service.capacity_ledger import CapacityLedger
from tests.fakes import FakeTimeSlotRepository


def _setup(capacity: int = 2, used: int = 0) -> tuple[CapacityLedger, FakeTimeSlotRepository]:
    repo = FakeTimeSlotRepository([
        TimeSlot(
            id=1,
            date=date(2025, 3, 1),
            start_time=time(10),
            end_time=time(11),
            capacity=capacity,
            used_capacity=used,
            status=SlotStatus.FULL if used >= capacity else SlotStatus.AVAILABLE,
        )
    ])
    return CapacityLedger(repo), repo


class TestReserve:

    def test_reserve_takes_one_unit(self):
        ledger, repo = _setup()
        slot = ledger.reserve(1)
        assert slot.used_capacity == 1
        assert repo.get_by_id(1).used_capacity == 1

    def test_reserve_until_full(self):
        ledger, repo = _setup(capacity=2)
        ledger.reserve(1)
        slot = ledger.reserve(1)
        assert slot.status == SlotStatus.FULL

    def test_reserve_full_slot_raises(self):
        ledger, repo = _setup(capacity=1, used=1)
        with pytest.raises(SlotFullError, match="#1 is full"):
            ledger.reserve(1)
        assert repo.get_by_id(1).used_capacity == 1

    def test_reserve_unknown_slot_raises(self):
        ledger, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="#99"):
            ledger.reserve(99)


class TestRelease:

    def test_release_gives_back_unit(self):
        ledger, repo = _setup(capacity=2, used=2)
        slot = ledger.release(1)
        assert slot.used_capacity == 1
        assert slot.status == SlotStatus.AVAILABLE

    def test_release_never_goes_negative(self):
        ledger, repo = _setup(used=0)
        ledger.release(1)
        assert repo.get_by_id(1).used_capacity == 0

    def test_release_unknown_slot_raises(self):
        ledger, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.release(42)
