"""SQLAlchemy-backed implementation of PaletteTypeRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from palette_oms.domain.model.palette_type import PaletteType
from palette_oms.domain.model.value_objects import Money
from palette_oms.domain.repository.palette_type_repository import (
    PaletteTypeRepository,
)
from palette_oms.infrastructure.persistence.tables import PaletteTypeRow


class SqlPaletteTypeRepository(PaletteTypeRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, palette_type_id: int) -> PaletteType | None:
        row = self._session.get(PaletteTypeRow, palette_type_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[PaletteType]:
        rows = self._session.scalars(select(PaletteTypeRow).order_by(PaletteTypeRow.name))
        return [self._to_domain(row) for row in rows]

    def add(self, palette_type: PaletteType) -> PaletteType:
        row = PaletteTypeRow(
            name=palette_type.name,
            description=palette_type.description,
            price=palette_type.price.amount if palette_type.price else None,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_domain(row)

    @staticmethod
    def _to_domain(row: PaletteTypeRow) -> PaletteType:
        return PaletteType(
            id=row.id,
            name=row.name,
            description=row.description,
            price=Money.of(row.price) if row.price is not None else None,
        )
