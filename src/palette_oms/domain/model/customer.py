"""Customer aggregate.

Customers are identified naturally by their phone number: order
admission reuses an existing customer with the same phone instead of
creating a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from palette_oms.domain.exceptions import ValidationError


@dataclass
class Customer:

    id: int | None
    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        phone: str,
        email: str | None = None,
        address: str | None = None,
    ) -> Customer:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if not phone or not phone.strip():
            raise ValidationError("Customer phone is required")
        return Customer(
            id=None,
            name=name.strip(),
            phone=phone.strip(),
            email=email or None,
            address=address or None,
        )
