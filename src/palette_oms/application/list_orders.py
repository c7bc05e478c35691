"""Application service: List Orders use case (query)."""

from __future__ import annotations

from palette_oms.application.dto import OrderDTO
from palette_oms.application.order_view import to_order_dto
from palette_oms.domain.exceptions import ValidationError
from palette_oms.domain.model.order import OrderStatus
from palette_oms.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        """Return orders newest first, optionally only those in *status*."""
        wanted = None
        if status is not None:
            try:
                wanted = OrderStatus(status)
            except ValueError as exc:
                raise ValidationError(f"Unknown order status '{status}'") from exc

        with self._uow as uow:
            return [to_order_dto(uow, order) for order in uow.orders.list_all(wanted)]
