"""Unit tests for the SlotGenerator domain service."""

from datetime import date, time

import pytest

from palette_oms.domain.exceptions import ValidationError
from palette_oms.domain.model.time_slot import SlotStatus
from palette_oms.domain.service.slot_generator import SlotGenerator, daily_buckets


def test_daily_buckets_cover_business_hours():
    buckets = daily_buckets()
    assert len(buckets) == 10
    assert buckets[0] == (time(8), time(9))
    assert buckets[-1] == (time(17), time(18))


def test_build_ten_slots_per_day():
    slots = SlotGenerator(capacity=5).build(date(2025, 3, 1), days_ahead=3)
    assert len(slots) == 30
    assert {s.date for s in slots} == {date(2025, 3, 1), date(2025, 3, 2), date(2025, 3, 3)}


def test_built_slots_are_empty_and_available():
    slots = SlotGenerator(capacity=5).build(date(2025, 3, 1), days_ahead=1)
    assert all(s.id is None for s in slots)
    assert all(s.capacity == 5 and s.used_capacity == 0 for s in slots)
    assert all(s.status == SlotStatus.AVAILABLE for s in slots)


def test_window_crosses_month_end():
    slots = SlotGenerator(capacity=1).build(date(2025, 1, 31), days_ahead=2)
    assert slots[-1].date == date(2025, 2, 1)


def test_zero_days_rejected():
    with pytest.raises(ValidationError, match="days_ahead"):
        SlotGenerator(capacity=5).build(date(2025, 3, 1), days_ahead=0)


def test_zero_capacity_rejected():
    with pytest.raises(ValidationError, match="capacity must be positive"):
        SlotGenerator(capacity=0)
