"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from palette_oms.domain.exceptions import EntityNotFoundError
from palette_oms.domain.model.order import Order, OrderItem, OrderStatus
from palette_oms.domain.model.value_objects import Quantity
from palette_oms.domain.repository.order_repository import OrderRepository
from palette_oms.infrastructure.persistence.tables import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        stmt = select(OrderRow).order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, order: Order) -> None:
        row = OrderRow(
            customer_id=order.customer_id,
            palette_type_id=order.palette_type_id,
            quantity=order.quantity,
            delivery_address=order.delivery_address,
            delivery_date=order.delivery_date,
            time_slot_id=order.time_slot_id,
            status=order.status.value,
            notes=order.notes,
            created_via_api=order.created_via_api,
            slot_reserved=order.slot_reserved,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRow(palette_type_id=item.palette_type_id, quantity=item.quantity.value)
                for item in order.items
            ],
        )
        self._session.add(row)
        self._session.flush()

        order.id = row.id
        for item, item_row in zip(order.items, row.items):
            item.id = item_row.id

    def update_status(self, order: Order) -> None:
        row = self._get_row(order.id)  # type: ignore[arg-type]
        row.status = order.status.value
        row.updated_at = order.updated_at
        self._session.flush()

    def delete(self, order_id: int) -> None:
        self._session.delete(self._get_row(order_id))
        self._session.flush()

    # --- Serialization --------------------------------------------------------

    def _get_row(self, order_id: int) -> OrderRow:
        row = self._session.get(OrderRow, order_id)
        if row is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return row

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            delivery_address=row.delivery_address,
            delivery_date=row.delivery_date,
            items=[
                OrderItem(
                    id=item.id,
                    palette_type_id=item.palette_type_id,
                    quantity=Quantity(item.quantity),
                )
                for item in row.items
            ],
            time_slot_id=row.time_slot_id,
            status=OrderStatus(row.status),
            notes=row.notes,
            created_via_api=row.created_via_api,
            slot_reserved=row.slot_reserved,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
