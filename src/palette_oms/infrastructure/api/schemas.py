"""Request bodies for the HTTP API.

Order fields are all optional at this level: a missing field must come
back as a 400 with the admission handler's message, not as a schema error.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from palette_oms.application.dto import OrderItemSpec, OrderRequest


class OrderItemIn(BaseModel):
    palette_type_id: Optional[int] = None
    quantity: Optional[int] = None


class OrderCreate(BaseModel):
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    delivery_address: Optional[str] = None
    delivery_date: Optional[date] = None
    notes: Optional[str] = None
    created_via_api: bool = True
    time_slot_id: Optional[int] = None
    items: Optional[list[OrderItemIn]] = None
    palette_type_id: Optional[int] = None
    quantity: Optional[int] = None

    def to_request(self) -> OrderRequest:
        return OrderRequest(
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            customer_email=self.customer_email,
            customer_address=self.customer_address,
            delivery_address=self.delivery_address,
            delivery_date=self.delivery_date,
            notes=self.notes,
            created_via_api=self.created_via_api,
            time_slot_id=self.time_slot_id,
            items=(
                [OrderItemSpec(i.palette_type_id, i.quantity) for i in self.items]
                if self.items is not None
                else None
            ),
            palette_type_id=self.palette_type_id,
            quantity=self.quantity,
        )


class GenerateSlotsRequest(BaseModel):
    start_date: Optional[date] = Field(None, description="First day; defaults to today")
    days_ahead: Optional[int] = Field(None, description="Window length; defaults to settings")


class GenerateSlotsResponse(BaseModel):
    created: int
    start_date: date
    days_ahead: int
