"""Integration tests for the SubmitOrder use case (order admission).

Uses the in-memory unit of work, no database.
"""

from datetime import date, time

import pytest

from palette_oms.application.dto import OrderItemSpec, OrderRequest
from palette_oms.application.submit_order import SlotFailurePolicy, SubmitOrderHandler
from palette_oms.domain.exceptions import SlotFullError, ValidationError
from palette_oms.domain.model.palette_type import PaletteType
from palette_oms.domain.model.time_slot import SlotStatus, TimeSlot
from palette_oms.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _uow(slot_capacity: int = 2, slot_used: int = 0) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        palette_types=[
            PaletteType(id=1, name="Europe", price=Money.of("12.50")),
            PaletteType(id=2, name="Half", price=Money.of("8.00")),
        ],
        time_slots=[
            TimeSlot(
                id=1,
                date=date(2025, 3, 1),
                start_time=time(10),
                end_time=time(11),
                capacity=slot_capacity,
                used_capacity=slot_used,
                status=SlotStatus.FULL if slot_used >= slot_capacity else SlotStatus.AVAILABLE,
            )
        ],
    )


def _request(**overrides) -> OrderRequest:
    fields = dict(
        customer_name="Jean Dupont",
        customer_phone="0102030405",
        delivery_address="1 rue du Port",
        delivery_date=date(2025, 3, 1),
        items=[OrderItemSpec(1, 2), OrderItemSpec(2, 3)],
    )
    fields.update(overrides)
    return OrderRequest(**fields)


class TestSubmitOrderHappyPath:

    def test_creates_provisional_order_with_items(self):
        uow = _uow()
        dto = SubmitOrderHandler(uow).handle(_request())

        assert dto.id == 1
        assert dto.status == "provisional"
        assert [(i.palette_type_id, i.quantity) for i in dto.order_items] == [(1, 2), (2, 3)]
        assert all(i.order_id == dto.id for i in dto.order_items)

    def test_legacy_fields_mirror_first_item(self):
        dto = SubmitOrderHandler(_uow()).handle(_request())
        assert dto.palette_type_id == 1
        assert dto.quantity == 2
        assert dto.palette_type.name == "Europe"
        assert dto.palette_type.price == "12.50"

    def test_legacy_single_item_form(self):
        dto = SubmitOrderHandler(_uow()).handle(
            _request(items=None, palette_type_id=2, quantity=4)
        )
        assert len(dto.order_items) == 1
        assert dto.order_items[0].palette_type_id == 2
        assert dto.order_items[0].quantity == 4

    def test_items_win_over_legacy_fields(self):
        dto = SubmitOrderHandler(_uow()).handle(_request(palette_type_id=2, quantity=9))
        assert len(dto.order_items) == 2
        assert dto.quantity == 2

    def test_enriched_with_customer(self):
        dto = SubmitOrderHandler(_uow()).handle(_request())
        assert dto.customer.name == "Jean Dupont"
        assert dto.customer.phone == "0102030405"

    def test_commits_once(self):
        uow = _uow()
        SubmitOrderHandler(uow).handle(_request())
        assert uow.commits == 1

    def test_created_via_api_flag_kept(self):
        dto = SubmitOrderHandler(_uow()).handle(_request(created_via_api=False))
        assert dto.created_via_api is False


class TestSubmitOrderCustomer:

    def test_reuses_customer_with_same_phone(self):
        uow = _uow()
        handler = SubmitOrderHandler(uow)
        first = handler.handle(_request())
        second = handler.handle(_request(customer_name="J. Dupont"))

        assert first.customer_id == second.customer_id
        assert len(uow.customers.list_all()) == 1

    def test_different_phone_creates_new_customer(self):
        uow = _uow()
        handler = SubmitOrderHandler(uow)
        handler.handle(_request())
        handler.handle(_request(customer_phone="0607080910"))
        assert len(uow.customers.list_all()) == 2


class TestSubmitOrderValidation:

    def test_missing_fields_listed(self):
        uow = _uow()
        with pytest.raises(ValidationError, match="customer_phone, delivery_date"):
            SubmitOrderHandler(uow).handle(_request(customer_phone=None, delivery_date=None))

    def test_blank_name_counts_as_missing(self):
        with pytest.raises(ValidationError, match="customer_name"):
            SubmitOrderHandler(_uow()).handle(_request(customer_name="  "))

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="items"):
            SubmitOrderHandler(_uow()).handle(_request(items=None))

    def test_missing_fields_leave_no_trace(self):
        uow = _uow()
        with pytest.raises(ValidationError):
            SubmitOrderHandler(uow).handle(_request(customer_name=None, time_slot_id=1))

        assert uow.orders.list_all() == []
        assert uow.customers.list_all() == []
        assert uow.time_slots.get_by_id(1).used_capacity == 0
        assert uow.time_slots.increment_calls == []

    def test_incomplete_item_rejected(self):
        with pytest.raises(ValidationError, match="palette_type_id and a quantity"):
            SubmitOrderHandler(_uow()).handle(_request(items=[OrderItemSpec(1, None)]))

    def test_zero_quantity_rejected(self):
        uow = _uow()
        with pytest.raises(ValidationError, match="positive"):
            SubmitOrderHandler(uow).handle(_request(items=[OrderItemSpec(1, 0)]))
        assert uow.orders.list_all() == []

    def test_unknown_palette_type_rejected(self):
        uow = _uow()
        with pytest.raises(ValidationError, match="Unknown palette type #9"):
            SubmitOrderHandler(uow).handle(_request(items=[OrderItemSpec(9, 1)]))
        assert uow.customers.list_all() == []

    def test_unknown_slot_rejected(self):
        uow = _uow()
        with pytest.raises(ValidationError, match="Unknown time slot #5"):
            SubmitOrderHandler(uow).handle(_request(time_slot_id=5))
        assert uow.orders.list_all() == []


class TestSubmitOrderSlot:

    def test_reserves_one_unit_per_order(self):
        uow = _uow(slot_capacity=5)
        dto = SubmitOrderHandler(uow).handle(_request(time_slot_id=1))

        assert dto.time_slot_id == 1
        assert dto.time_slot.used_capacity == 1
        assert dto.slot_reserved is True
        assert uow.time_slots.get_by_id(1).used_capacity == 1

    def test_last_unit_marks_slot_full(self):
        uow = _uow(slot_capacity=1)
        dto = SubmitOrderHandler(uow).handle(_request(time_slot_id=1))
        assert dto.time_slot.status == "full"

    def test_no_slot_no_reservation(self):
        uow = _uow()
        SubmitOrderHandler(uow).handle(_request())
        assert uow.time_slots.increment_calls == []

    def test_full_slot_proceeds_by_default(self):
        uow = _uow(slot_capacity=1, slot_used=1)
        dto = SubmitOrderHandler(uow).handle(_request(time_slot_id=1))

        assert dto.status == "provisional"
        assert uow.orders.get_by_id(dto.id) is not None
        assert dto.time_slot_id == 1
        assert dto.slot_reserved is False
        assert uow.time_slots.increment_calls == [1]
        assert uow.time_slots.get_by_id(1).used_capacity == 1

    def test_full_slot_rejected_under_reject_policy(self):
        uow = _uow(slot_capacity=1, slot_used=1)
        handler = SubmitOrderHandler(uow, SlotFailurePolicy.REJECT)

        with pytest.raises(SlotFullError):
            handler.handle(_request(time_slot_id=1))

        assert uow.orders.list_all() == []
        assert uow.customers.list_all() == []
        assert uow.commits == 0
