"""Application service: Cancel Order use case.

If the order holds a delivery slot, its capacity unit is released in the
same transaction as the status change.  Orders without a slot are
cancelled without touching the capacity ledger.
"""

from __future__ import annotations

import logging

from palette_oms.application.dto import OrderDTO
from palette_oms.application.order_view import to_order_dto
from palette_oms.domain.exceptions import EntityNotFoundError
from palette_oms.domain.repository.unit_of_work import UnitOfWork
from palette_oms.domain.service.capacity_ledger import CapacityLedger

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            # Transition first: an illegal cancel must not touch capacity.
            order.cancel()
            if order.holds_slot:
                CapacityLedger(uow.time_slots).release(order.time_slot_id)  # type: ignore[arg-type]

            uow.orders.update_status(order)
            uow.commit()
            dto = to_order_dto(uow, order)

        logger.info(f"Order #{order_id} cancelled (slot={order.time_slot_id})")
        return dto
