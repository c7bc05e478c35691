"""PaletteType aggregate: catalog reference data."""

from __future__ import annotations

from dataclasses import dataclass

from palette_oms.domain.model.value_objects import Money


@dataclass(frozen=True)
class PaletteType:
    """A kind of palette that can be delivered.

    Frozen: order processing only ever reads palette types.
    """

    id: int | None
    name: str
    description: str | None = None
    price: Money | None = None
