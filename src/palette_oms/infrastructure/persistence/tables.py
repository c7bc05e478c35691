"""Relational schema.

Uniqueness constraints carry two invariants the application relies on:
one customer per phone number, and one slot per (date, start time).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from palette_oms.infrastructure.persistence.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomerRow(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False, unique=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class PaletteTypeRow(Base):
    __tablename__ = "palette_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)


class TimeSlotRow(Base):
    __tablename__ = "time_slots"
    __table_args__ = (
        UniqueConstraint("date", "start_time", name="uq_time_slots_date_start"),
        CheckConstraint("capacity >= 0", name="ck_time_slots_capacity"),
        CheckConstraint(
            "used_capacity >= 0 AND used_capacity <= capacity",
            name="ck_time_slots_used_capacity",
        ),
        CheckConstraint("status IN ('available', 'full')", name="ck_time_slots_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    capacity = Column(Integer, nullable=False)
    used_capacity = Column(Integer, nullable=False, default=0)
    status = Column(String(16), nullable=False, default="available")


class OrderRow(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    # legacy single-item columns, mirror of the first order item
    palette_type_id = Column(Integer, ForeignKey("palette_types.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    delivery_address = Column(Text, nullable=False)
    delivery_date = Column(Date, nullable=False)
    time_slot_id = Column(Integer, ForeignKey("time_slots.id"), nullable=True, index=True)
    status = Column(String(16), nullable=False, default="provisional", index=True)
    notes = Column(Text, nullable=True)
    created_via_api = Column(Boolean, nullable=False, default=True)
    slot_reserved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    items = relationship(
        "OrderItemRow",
        cascade="all, delete-orphan",
        order_by="OrderItemRow.id",
        lazy="selectin",
    )


class OrderItemRow(Base):
    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    palette_type_id = Column(Integer, ForeignKey("palette_types.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
