"""Abstract repository for Customer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from palette_oms.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def get_by_phone(self, phone: str) -> Customer | None:
        """Return the customer with this exact phone number, or None."""

    @abstractmethod
    def get_or_create(self, customer: Customer) -> Customer:
        """Return the customer sharing *customer*'s phone, inserting it if absent.

        Implementations must make the find-or-create a single atomic step
        keyed on phone uniqueness, so concurrent submissions with the
        same new phone end up with one customer.
        """
