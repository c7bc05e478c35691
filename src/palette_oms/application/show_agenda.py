"""Application service: Show Agenda use case (query).

Lists the delivery slots a new order can still be booked into.
"""

from __future__ import annotations

from datetime import date

from palette_oms.application.dto import TimeSlotDTO
from palette_oms.application.order_view import time_slot_to_dto
from palette_oms.domain.repository.unit_of_work import UnitOfWork


class ShowAgendaHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, today: date) -> list[TimeSlotDTO]:
        with self._uow as uow:
            return [time_slot_to_dto(slot) for slot in uow.time_slots.list_available(today)]
