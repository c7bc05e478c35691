"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from palette_oms.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return orders newest first, optionally filtered by status."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and its items; assigns ``order.id``."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist ``order.status`` and ``order.updated_at``."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order; its items go with it."""
