"""Application service: Delete Order use case.

Hard-deletes a cancelled order together with its items.  The slot unit
was already released at cancellation time, so nothing else changes.
Restricting this to administrators is the caller's job.
"""

from __future__ import annotations

import logging

from palette_oms.domain.exceptions import EntityNotFoundError
from palette_oms.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.ensure_deletable()
            uow.orders.delete(order_id)
            uow.commit()

        logger.info(f"Order #{order_id} deleted")
