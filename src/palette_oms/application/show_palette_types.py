"""Application service: Show Palette Types use case (query)."""

from __future__ import annotations

from palette_oms.application.dto import PaletteTypeDTO
from palette_oms.application.order_view import palette_type_to_dto
from palette_oms.domain.repository.unit_of_work import UnitOfWork


class ShowPaletteTypesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[PaletteTypeDTO]:
        with self._uow as uow:
            return [palette_type_to_dto(p) for p in uow.palette_types.list_all()]
