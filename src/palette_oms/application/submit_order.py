"""Application service: Submit Order use case (order admission).

Turns a raw order request into a persisted provisional Order with its
items, finding or creating the customer by phone and reserving the
requested delivery slot.  Everything runs in one unit of work.

What happens when the slot reservation fails is a policy decision:

- ``PROCEED`` (default): the failure is logged and the order is kept
  with ``slot_reserved`` false, so cancelling it later releases nothing.
  The reservation runs inside a savepoint so the rest of the transaction
  survives.
- ``REJECT``: the failure propagates and nothing is persisted.
"""

from __future__ import annotations

import logging
from enum import Enum

from palette_oms.application.dto import OrderDTO, OrderItemSpec, OrderRequest
from palette_oms.application.order_view import to_order_dto
from palette_oms.domain.exceptions import DomainException, ValidationError
from palette_oms.domain.model.customer import Customer
from palette_oms.domain.model.order import Order, OrderItem
from palette_oms.domain.model.value_objects import Quantity
from palette_oms.domain.repository.unit_of_work import UnitOfWork
from palette_oms.domain.service.capacity_ledger import CapacityLedger

logger = logging.getLogger(__name__)


class SlotFailurePolicy(Enum):
    PROCEED = "proceed"
    REJECT = "reject"


REQUIRED_FIELDS = ("customer_name", "customer_phone", "delivery_address", "delivery_date")


class SubmitOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        slot_failure_policy: SlotFailurePolicy = SlotFailurePolicy.PROCEED,
    ) -> None:
        self._uow = uow
        self._policy = slot_failure_policy

    def handle(self, request: OrderRequest) -> OrderDTO:
        """Admit a new order.

        Steps:
        1. Validate required fields and items (no side effects on failure).
        2. Find or create the customer by phone.
        3. Reserve the time slot, if one was requested.
        4. Create the provisional Order and its items.
        5. Commit and return the enriched order.
        """
        specs = self._item_specs(request)
        self._validate(request, specs)

        with self._uow as uow:
            items = self._build_items(uow, specs)

            if request.time_slot_id is not None:
                if uow.time_slots.get_by_id(request.time_slot_id) is None:
                    raise ValidationError(f"Unknown time slot #{request.time_slot_id}")

            customer = uow.customers.get_or_create(
                Customer.create(
                    name=request.customer_name,  # type: ignore[arg-type]
                    phone=request.customer_phone,  # type: ignore[arg-type]
                    email=request.customer_email,
                    address=request.customer_address,
                )
            )

            order = Order.create(
                customer_id=customer.id,  # type: ignore[arg-type]
                delivery_address=request.delivery_address,  # type: ignore[arg-type]
                delivery_date=request.delivery_date,  # type: ignore[arg-type]
                items=items,
                time_slot_id=request.time_slot_id,
                notes=request.notes,
                created_via_api=request.created_via_api,
            )
            if order.time_slot_id is not None:
                order.slot_reserved = self._reserve_slot(uow, order.time_slot_id)
            uow.orders.add(order)

            uow.commit()
            dto = to_order_dto(uow, order)

        logger.info(
            f"Order #{order.id} admitted for customer #{customer.id} "
            f"({len(items)} item(s), slot={order.time_slot_id})"
        )
        return dto

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _item_specs(request: OrderRequest) -> list[OrderItemSpec]:
        """Multi-item form wins; otherwise fall back to the legacy single item."""
        if request.items is not None:
            return list(request.items)
        if request.palette_type_id is None and request.quantity is None:
            return []
        return [OrderItemSpec(palette_type_id=request.palette_type_id, quantity=request.quantity)]

    @staticmethod
    def _validate(request: OrderRequest, specs: list[OrderItemSpec]) -> None:
        missing = [
            name
            for name in REQUIRED_FIELDS
            if getattr(request, name) is None
            or (isinstance(getattr(request, name), str) and not getattr(request, name).strip())
        ]
        if not specs:
            missing.append("items")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        for spec in specs:
            if spec.palette_type_id is None or spec.quantity is None:
                raise ValidationError("Each item needs a palette_type_id and a quantity")

    @staticmethod
    def _build_items(uow: UnitOfWork, specs: list[OrderItemSpec]) -> list[OrderItem]:
        items: list[OrderItem] = []
        for spec in specs:
            if uow.palette_types.get_by_id(spec.palette_type_id) is None:  # type: ignore[arg-type]
                raise ValidationError(f"Unknown palette type #{spec.palette_type_id}")
            items.append(
                OrderItem(
                    palette_type_id=spec.palette_type_id,  # type: ignore[arg-type]
                    quantity=Quantity(spec.quantity),  # type: ignore[arg-type]
                )
            )
        return items

    def _reserve_slot(self, uow: UnitOfWork, slot_id: int) -> bool:
        """Take a unit of *slot_id*; returns whether one was granted."""
        ledger = CapacityLedger(uow.time_slots)

        if self._policy is SlotFailurePolicy.REJECT:
            ledger.reserve(slot_id)
            return True

        try:
            with uow.savepoint():
                ledger.reserve(slot_id)
        except DomainException as exc:
            logger.warning(f"Order kept without a capacity unit on slot #{slot_id}: {exc}")
            return False
        return True
