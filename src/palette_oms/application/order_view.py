"""Mapping from domain objects to DTOs.

Builds the enriched order view (customer, first palette type, time slot
and items joined in) shared by every handler that returns an order.
"""

from __future__ import annotations

from palette_oms.application.dto import (
    CustomerDTO,
    OrderDTO,
    OrderItemDTO,
    PaletteTypeDTO,
    TimeSlotDTO,
)
from palette_oms.domain.model.customer import Customer
from palette_oms.domain.model.order import Order
from palette_oms.domain.model.palette_type import PaletteType
from palette_oms.domain.model.time_slot import TimeSlot
from palette_oms.domain.repository.unit_of_work import UnitOfWork


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        phone=customer.phone,
        email=customer.email,
        address=customer.address,
        created_at=customer.created_at.isoformat(),
    )


def palette_type_to_dto(palette_type: PaletteType) -> PaletteTypeDTO:
    return PaletteTypeDTO(
        id=palette_type.id,  # type: ignore[arg-type]
        name=palette_type.name,
        description=palette_type.description,
        price=f"{palette_type.price.amount:.2f}" if palette_type.price else None,
    )


def time_slot_to_dto(slot: TimeSlot) -> TimeSlotDTO:
    return TimeSlotDTO(
        id=slot.id,  # type: ignore[arg-type]
        date=slot.date.isoformat(),
        start_time=slot.start_time.strftime("%H:%M"),
        end_time=slot.end_time.strftime("%H:%M"),
        capacity=slot.capacity,
        used_capacity=slot.used_capacity,
        status=slot.status.value,
    )


def to_order_dto(uow: UnitOfWork, order: Order) -> OrderDTO:
    """Join *order* with its customer, first palette type and slot."""
    customer = uow.customers.get_by_id(order.customer_id)
    palette_type = uow.palette_types.get_by_id(order.palette_type_id)
    slot = (
        uow.time_slots.get_by_id(order.time_slot_id)
        if order.time_slot_id is not None
        else None
    )

    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        palette_type_id=order.palette_type_id,
        quantity=order.quantity,
        delivery_address=order.delivery_address,
        delivery_date=order.delivery_date.isoformat(),
        time_slot_id=order.time_slot_id,
        status=order.status.value,
        notes=order.notes,
        created_via_api=order.created_via_api,
        slot_reserved=order.slot_reserved,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
        customer=customer_to_dto(customer) if customer else None,
        palette_type=palette_type_to_dto(palette_type) if palette_type else None,
        time_slot=time_slot_to_dto(slot) if slot else None,
        order_items=[
            OrderItemDTO(
                id=item.id,
                order_id=order.id,  # type: ignore[arg-type]
                palette_type_id=item.palette_type_id,
                quantity=item.quantity.value,
            )
            for item in order.items
        ],
    )
