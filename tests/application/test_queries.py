"""Tests for the read-side use cases: orders, agenda and catalog."""

from datetime import date, time

import pytest

from palette_oms.application.add_palette_type import AddPaletteTypeHandler
from palette_oms.application.cancel_order import CancelOrderHandler
from palette_oms.application.dto import OrderItemSpec, OrderRequest
from palette_oms.application.list_orders import ListOrdersHandler
from palette_oms.application.show_agenda import ShowAgendaHandler
from palette_oms.application.show_order import ShowOrderHandler
from palette_oms.application.show_palette_types import ShowPaletteTypesHandler
from palette_oms.application.submit_order import SubmitOrderHandler
from palette_oms.domain.exceptions import EntityNotFoundError, ValidationError
from palette_oms.domain.model.palette_type import PaletteType
from palette_oms.domain.model.time_slot import SlotStatus, TimeSlot
from tests.fakes import FakeUnitOfWork


def _slot(slot_id: int, day: date, hour: int, full: bool = False) -> TimeSlot:
    return TimeSlot(
        id=slot_id,
        date=day,
        start_time=time(hour),
        end_time=time(hour + 1),
        capacity=1,
        used_capacity=1 if full else 0,
        status=SlotStatus.FULL if full else SlotStatus.AVAILABLE,
    )


def _submit(uow: FakeUnitOfWork, phone: str = "0102030405") -> int:
    return SubmitOrderHandler(uow).handle(
        OrderRequest(
            customer_name="Jean",
            customer_phone=phone,
            delivery_address="1 rue du Port",
            delivery_date=date(2025, 3, 1),
            items=[OrderItemSpec(1, 1)],
        )
    ).id


class TestOrderQueries:

    def test_show_order(self):
        uow = FakeUnitOfWork(palette_types=[PaletteType(id=1, name="Europe")])
        order_id = _submit(uow)
        dto = ShowOrderHandler(uow).handle(order_id)
        assert dto.id == order_id
        assert dto.customer.phone == "0102030405"

    def test_show_unknown_order(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(FakeUnitOfWork()).handle(1)

    def test_list_orders_filtered_by_status(self):
        uow = FakeUnitOfWork(palette_types=[PaletteType(id=1, name="Europe")])
        first = _submit(uow)
        second = _submit(uow, phone="0607080910")
        CancelOrderHandler(uow).handle(first)

        handler = ListOrdersHandler(uow)
        assert {o.id for o in handler.handle()} == {first, second}
        assert [o.id for o in handler.handle("cancelled")] == [first]
        assert [o.id for o in handler.handle("provisional")] == [second]

    def test_list_orders_unknown_status(self):
        with pytest.raises(ValidationError, match="Unknown order status 'lost'"):
            ListOrdersHandler(FakeUnitOfWork()).handle("lost")


class TestAgenda:

    def test_only_future_available_slots_in_order(self):
        today = date(2025, 3, 2)
        uow = FakeUnitOfWork(
            time_slots=[
                _slot(1, date(2025, 3, 1), 8),
                _slot(2, date(2025, 3, 3), 9),
                _slot(3, date(2025, 3, 2), 10),
                _slot(4, date(2025, 3, 2), 11, full=True),
                _slot(5, date(2025, 3, 2), 8),
            ]
        )
        agenda = ShowAgendaHandler(uow).handle(today)
        assert [s.id for s in agenda] == [5, 3, 2]
        assert agenda[0].start_time == "08:00"
        assert agenda[0].date == "2025-03-02"


class TestPaletteTypes:

    def test_add_and_list_sorted_by_name(self):
        uow = FakeUnitOfWork()
        AddPaletteTypeHandler(uow).handle("Half", price="8")
        AddPaletteTypeHandler(uow).handle("Europe", description="1200x800", price="12.5")

        listed = ShowPaletteTypesHandler(uow).handle()
        assert [p.name for p in listed] == ["Europe", "Half"]
        assert listed[0].price == "12.50"
        assert listed[0].description == "1200x800"

    def test_duplicate_name_rejected(self):
        uow = FakeUnitOfWork(palette_types=[PaletteType(id=1, name="Europe")])
        with pytest.raises(ValidationError, match="already exists"):
            AddPaletteTypeHandler(uow).handle("europe")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            AddPaletteTypeHandler(FakeUnitOfWork()).handle(" ")
