"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items.  Status changes go
through an explicit transition table so that an illegal request (for
instance confirming a delivered order) is rejected instead of trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from palette_oms.domain.exceptions import InvalidTransition, ValidationError
from palette_oms.domain.model.value_objects import Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROVISIONAL = "provisional"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderEvent(Enum):
    CONFIRM = "confirm"
    DELIVER = "deliver"
    CANCEL = "cancel"


# (current status, event) -> new status.  Pairs not listed are illegal.
TRANSITIONS: dict[tuple[OrderStatus, OrderEvent], OrderStatus] = {
    (OrderStatus.PROVISIONAL, OrderEvent.CONFIRM): OrderStatus.CONFIRMED,
    (OrderStatus.PROVISIONAL, OrderEvent.DELIVER): OrderStatus.DELIVERED,
    (OrderStatus.CONFIRMED, OrderEvent.DELIVER): OrderStatus.DELIVERED,
    (OrderStatus.PENDING, OrderEvent.CANCEL): OrderStatus.CANCELLED,
    (OrderStatus.PROVISIONAL, OrderEvent.CANCEL): OrderStatus.CANCELLED,
    (OrderStatus.CONFIRMED, OrderEvent.CANCEL): OrderStatus.CANCELLED,
}

MAX_ITEMS = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderItem:
    """One (palette type, quantity) line of an order."""

    palette_type_id: int
    quantity: Quantity
    id: int | None = None


@dataclass
class Order:
    """Aggregate root for delivery orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_id: int
    delivery_address: str
    delivery_date: date
    items: list[OrderItem]
    time_slot_id: int | None = None
    status: OrderStatus = OrderStatus.PROVISIONAL
    notes: str | None = None
    created_via_api: bool = True
    # true only once the capacity ledger actually granted a unit
    slot_reserved: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: int,
        delivery_address: str,
        delivery_date: date,
        items: list[OrderItem],
        time_slot_id: int | None = None,
        notes: str | None = None,
        created_via_api: bool = True,
    ) -> Order:
        """Create a new provisional order, enforcing all invariants."""
        if not delivery_address or not delivery_address.strip():
            raise ValidationError("Delivery address is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_ITEMS:
            raise ValidationError(f"Maximum {MAX_ITEMS} items per order")

        return Order(
            id=None,
            customer_id=customer_id,
            delivery_address=delivery_address.strip(),
            delivery_date=delivery_date,
            items=list(items),
            time_slot_id=time_slot_id,
            status=OrderStatus.PROVISIONAL,
            notes=notes,
            created_via_api=created_via_api,
        )

    # --- Legacy single-item view ----------------------------------------------

    @property
    def palette_type_id(self) -> int:
        """First item's palette type, kept for older single-item readers."""
        return self.items[0].palette_type_id

    @property
    def quantity(self) -> int:
        return self.items[0].quantity.value

    # --- State transitions ----------------------------------------------------

    def apply(self, event: OrderEvent) -> OrderStatus:
        """Move to the status the transition table allows for *event*.

        Returns the previous status so callers can decide on side effects.
        """
        target = TRANSITIONS.get((self.status, event))
        if target is None:
            raise InvalidTransition(
                f"Cannot {event.value} order in {self.status.value} status"
            )
        previous = self.status
        self.status = target
        self.updated_at = _utcnow()
        return previous

    def confirm(self) -> None:
        self.apply(OrderEvent.CONFIRM)

    def deliver(self) -> None:
        self.apply(OrderEvent.DELIVER)

    def cancel(self) -> None:
        """Transition any non-terminal status -> CANCELLED.

        Releasing the held slot unit is coordinated by the application
        handler through the capacity ledger.
        """
        self.apply(OrderEvent.CANCEL)

    def ensure_deletable(self) -> None:
        """Only cancelled orders may be removed for good."""
        if self.status != OrderStatus.CANCELLED:
            raise InvalidTransition(
                f"Cannot delete order in {self.status.value} status; cancel it first"
            )

    @property
    def holds_slot(self) -> bool:
        """Whether cancelling must give a capacity unit back."""
        return self.time_slot_id is not None and self.slot_reserved
