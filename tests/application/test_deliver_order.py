"""Tests for the DeliverOrder use case."""

from datetime import date

import pytest

from palette_oms.application.cancel_order import CancelOrderHandler
from palette_oms.application.confirm_order import ConfirmOrderHandler
from palette_oms.application.deliver_order import DeliverOrderHandler
from palette_oms.application.dto import OrderRequest
from palette_oms.application.submit_order import SubmitOrderHandler
from palette_oms.domain.exceptions import EntityNotFoundError, InvalidTransition
from palette_oms.domain.model.palette_type import PaletteType
from tests.fakes import FakeUnitOfWork


def _setup() -> tuple[FakeUnitOfWork, int]:
    uow = FakeUnitOfWork(palette_types=[PaletteType(id=1, name="Europe")])
    dto = SubmitOrderHandler(uow).handle(
        OrderRequest(
            customer_name="Jean",
            customer_phone="0102030405",
            delivery_address="1 rue du Port",
            delivery_date=date(2025, 3, 1),
            palette_type_id=1,
            quantity=2,
        )
    )
    return uow, dto.id


def test_deliver_provisional_order():
    uow, order_id = _setup()
    assert DeliverOrderHandler(uow).handle(order_id).status == "delivered"


def test_deliver_confirmed_order():
    uow, order_id = _setup()
    ConfirmOrderHandler(uow).handle(order_id)
    assert DeliverOrderHandler(uow).handle(order_id).status == "delivered"


def test_deliver_cancelled_rejected():
    uow, order_id = _setup()
    CancelOrderHandler(uow).handle(order_id)
    with pytest.raises(InvalidTransition, match="Cannot deliver order in cancelled status"):
        DeliverOrderHandler(uow).handle(order_id)


def test_delivered_is_terminal():
    uow, order_id = _setup()
    DeliverOrderHandler(uow).handle(order_id)
    with pytest.raises(InvalidTransition):
        DeliverOrderHandler(uow).handle(order_id)
    with pytest.raises(InvalidTransition):
        CancelOrderHandler(uow).handle(order_id)


def test_unknown_order():
    uow, _ = _setup()
    with pytest.raises(EntityNotFoundError):
        DeliverOrderHandler(uow).handle(123)
