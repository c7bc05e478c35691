"""Abstract repository for PaletteType reference data.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from palette_oms.domain.model.palette_type import PaletteType


class PaletteTypeRepository(ABC):

    @abstractmethod
    def get_by_id(self, palette_type_id: int) -> PaletteType | None:
        """Return a palette type by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PaletteType]:
        """Return every palette type, ordered by name."""

    @abstractmethod
    def add(self, palette_type: PaletteType) -> PaletteType:
        """Persist a new palette type and return it with its ID."""
