"""Application service: Show Order use case (query)."""

from __future__ import annotations

from palette_oms.application.dto import OrderDTO
from palette_oms.application.order_view import to_order_dto
from palette_oms.domain.exceptions import EntityNotFoundError
from palette_oms.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            return to_order_dto(uow, order)
