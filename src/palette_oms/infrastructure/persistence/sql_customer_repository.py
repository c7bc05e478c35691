"""SQLAlchemy-backed implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from palette_oms.domain.exceptions import PersistenceError
from palette_oms.domain.model.customer import Customer
from palette_oms.domain.repository.customer_repository import CustomerRepository
from palette_oms.infrastructure.persistence.database import insert_or_skip
from palette_oms.infrastructure.persistence.tables import CustomerRow


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: int) -> Customer | None:
        row = self._session.get(CustomerRow, customer_id)
        return self._to_domain(row) if row is not None else None

    def get_by_phone(self, phone: str) -> Customer | None:
        row = self._session.scalars(
            select(CustomerRow).where(CustomerRow.phone == phone)
        ).first()
        return self._to_domain(row) if row is not None else None

    def get_or_create(self, customer: Customer) -> Customer:
        insert_or_skip(
            self._session,
            CustomerRow,
            {
                "name": customer.name,
                "phone": customer.phone,
                "email": customer.email,
                "address": customer.address,
                "created_at": customer.created_at,
            },
            conflict_columns=["phone"],
        )
        stored = self.get_by_phone(customer.phone)
        if stored is None:
            raise PersistenceError(f"Customer with phone {customer.phone} could not be stored")
        return stored

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: CustomerRow) -> Customer:
        return Customer(
            id=row.id,
            name=row.name,
            phone=row.phone,
            email=row.email,
            address=row.address,
            created_at=row.created_at,
        )
