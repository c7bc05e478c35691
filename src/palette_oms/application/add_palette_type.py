"""Application service: Add Palette Type use case."""

from __future__ import annotations

from palette_oms.application.dto import PaletteTypeDTO
from palette_oms.application.order_view import palette_type_to_dto
from palette_oms.domain.exceptions import ValidationError
from palette_oms.domain.model.palette_type import PaletteType
from palette_oms.domain.model.value_objects import Money
from palette_oms.domain.repository.unit_of_work import UnitOfWork


class AddPaletteTypeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        description: str | None = None,
        price: str | None = None,
    ) -> PaletteTypeDTO:
        """Add a new palette type to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Palette type name is required")

        palette_type = PaletteType(
            id=None,
            name=name.strip(),
            description=description or None,
            price=Money.of(price) if price is not None else None,
        )

        with self._uow as uow:
            existing = {p.name.lower() for p in uow.palette_types.list_all()}
            if palette_type.name.lower() in existing:
                raise ValidationError(f"Palette type '{palette_type.name}' already exists")
            saved = uow.palette_types.add(palette_type)
            uow.commit()

        return palette_type_to_dto(saved)
