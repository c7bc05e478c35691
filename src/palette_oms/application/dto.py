"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals.  Dates and times are ISO-8601 strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (palette type + quantity)."""

    palette_type_id: int | None
    quantity: int | None


@dataclass(frozen=True)
class OrderRequest:
    """Input: a raw order submission.

    Everything is optional here on purpose; the admission handler decides
    what is missing and reports it as a validation error.
    """

    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    delivery_address: str | None = None
    delivery_date: date | None = None
    notes: str | None = None
    created_via_api: bool = True
    time_slot_id: int | None = None
    items: list[OrderItemSpec] | None = None
    # legacy single-item form
    palette_type_id: int | None = None
    quantity: int | None = None


@dataclass(frozen=True)
class CustomerDTO:
    id: int
    name: str
    phone: str
    email: str | None
    address: str | None
    created_at: str


@dataclass(frozen=True)
class PaletteTypeDTO:
    id: int
    name: str
    description: str | None
    price: str | None  # decimal string, e.g. "12.50"


@dataclass(frozen=True)
class TimeSlotDTO:
    id: int
    date: str
    start_time: str
    end_time: str
    capacity: int
    used_capacity: int
    status: str


@dataclass(frozen=True)
class OrderItemDTO:
    id: int | None
    order_id: int
    palette_type_id: int
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order enriched with its customer, slot and items."""

    id: int
    customer_id: int
    palette_type_id: int
    quantity: int
    delivery_address: str
    delivery_date: str
    time_slot_id: int | None
    status: str
    notes: str | None
    created_via_api: bool
    slot_reserved: bool
    created_at: str
    updated_at: str
    customer: CustomerDTO | None = None
    palette_type: PaletteTypeDTO | None = None
    time_slot: TimeSlotDTO | None = None
    order_items: list[OrderItemDTO] = field(default_factory=list)
