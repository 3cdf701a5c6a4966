# customer_api/repositories/customer_repository.py

from collections import defaultdict
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import Numeric, func, select, update
from sqlalchemy.engine import Connection

from customer_api.db.schema import customers, invoices, telephone_numbers
from customer_api.domain.entities import Customer, LoadShape
from customer_api.domain.exceptions import NotFoundError
from customer_api.repositories.base import BaseRepository, translate_errors
from customer_api.repositories.invoice_repository import invoice_values, row_to_invoice
from customer_api.repositories.telephone_number_repository import (
    row_to_telephone_number,
    telephone_number_values,
)


def row_to_customer(row) -> Customer:
    return Customer(id=row["id"], name=row["name"], email=row["email"])


class CustomerRepository(BaseRepository):
    """
    Customers and their owned invoices / phone numbers.

    Reads with LoadShape.WITH_RELATIONS fetch the children on the same
    connection as the customers themselves, one query per child table
    regardless of how many customers were matched.
    """

    table = customers
    entity_name = "customer"

    def _load_relations(self, conn: Connection, found: List[Customer]) -> None:
        by_id = {customer.id: customer for customer in found}
        for customer in found:
            customer.invoices = []
            customer.phone_numbers = []
        if not by_id:
            return

        invoice_rows = conn.execute(
            select(invoices)
            .where(invoices.c.customer_id.in_(list(by_id)))
            .order_by(invoices.c.id)
        ).mappings().all()
        for row in invoice_rows:
            by_id[row["customer_id"]].invoices.append(row_to_invoice(row))

        phone_rows = conn.execute(
            select(telephone_numbers)
            .where(telephone_numbers.c.customer_id.in_(list(by_id)))
            .order_by(telephone_numbers.c.id)
        ).mappings().all()
        for row in phone_rows:
            by_id[row["customer_id"]].phone_numbers.append(row_to_telephone_number(row))

    def _fetch(self, conn: Connection, stmt, shape: LoadShape) -> List[Customer]:
        found = [row_to_customer(row) for row in conn.execute(stmt).mappings().all()]
        if shape is LoadShape.WITH_RELATIONS:
            self._load_relations(conn, found)
        return found

    def _query(self, stmt, shape: LoadShape) -> List[Customer]:
        with translate_errors("select customer"):
            with self.engine.connect() as conn:
                return self._fetch(conn, stmt, shape)

    def create(self, customer: Customer) -> Customer:
        """Insert the customer and every owned invoice / phone number in one transaction."""
        invoice_ids = []
        phone_ids = []
        with translate_errors("insert customer"):
            with self.engine.begin() as conn:
                result = conn.execute(
                    customers.insert().values(name=customer.name, email=customer.email)
                )
                customer_id = result.inserted_primary_key[0]

                for invoice in customer.invoices or []:
                    values = invoice_values(invoice)
                    values["customer_id"] = customer_id
                    result = conn.execute(invoices.insert().values(**values))
                    invoice_ids.append(result.inserted_primary_key[0])

                for telephone_number in customer.phone_numbers or []:
                    values = telephone_number_values(telephone_number)
                    values["customer_id"] = customer_id
                    result = conn.execute(telephone_numbers.insert().values(**values))
                    phone_ids.append(result.inserted_primary_key[0])

        # Only hand out ids once the transaction has committed.
        customer.id = customer_id
        customer.invoices = list(customer.invoices or [])
        customer.phone_numbers = list(customer.phone_numbers or [])
        for invoice, invoice_id in zip(customer.invoices, invoice_ids):
            invoice.id = invoice_id
            invoice.customer_id = customer_id
        for telephone_number, phone_id in zip(customer.phone_numbers, phone_ids):
            telephone_number.id = phone_id
            telephone_number.customer_id = customer_id
        return customer

    def get_by_id(self, customer_id: int, shape: LoadShape = LoadShape.SUMMARY) -> Optional[Customer]:
        found = self._query(select(customers).where(customers.c.id == customer_id), shape)
        return found[0] if found else None

    def get_by_email(self, email: str, shape: LoadShape = LoadShape.SUMMARY) -> Optional[Customer]:
        found = self._query(select(customers).where(customers.c.email == email), shape)
        return found[0] if found else None

    def get_all(self, shape: LoadShape = LoadShape.SUMMARY) -> List[Customer]:
        return self._query(select(customers).order_by(customers.c.id), shape)

    def update(self, customer: Customer) -> Customer:
        """Overwrite name and email. Owned invoices and phone numbers are not touched."""
        stmt = (
            update(customers)
            .where(customers.c.id == customer.id)
            .values(name=customer.name, email=customer.email)
        )
        with translate_errors("update customer"):
            with self.engine.begin() as conn:
                result = conn.execute(stmt)
                # Matched rows, not changed rows (SQLAlchemy asks MySQL drivers for FOUND_ROWS)
                if result.rowcount == 0:
                    raise NotFoundError("Customer", customer.id)
        return customer

    def delete(self, customer_id: int) -> bool:
        """Delete the customer with its invoices and phone numbers."""
        with translate_errors("delete customer"):
            with self.engine.begin() as conn:
                conn.execute(invoices.delete().where(invoices.c.customer_id == customer_id))
                conn.execute(
                    telephone_numbers.delete().where(telephone_numbers.c.customer_id == customer_id)
                )
                result = conn.execute(customers.delete().where(customers.c.id == customer_id))
                deleted = result.rowcount > 0
        return deleted

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(customers.c.id).where(customers.c.email == email)
        if exclude_id is not None:
            stmt = stmt.where(customers.c.id != exclude_id)
        with translate_errors("select customer"):
            with self.engine.connect() as conn:
                return conn.execute(stmt.limit(1)).first() is not None

    def get_paged(
        self, page: int, page_size: int, shape: LoadShape = LoadShape.SUMMARY
    ) -> Tuple[List[Customer], int]:
        """
        Return one page of customers (1-indexed, id order) and the total
        number of customers.
        """
        count_stmt = select(func.count()).select_from(customers)
        stmt = (
            select(customers)
            .order_by(customers.c.id)
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        with translate_errors("select customer"):
            with self.engine.connect() as conn:
                total = conn.execute(count_stmt).scalar_one()
                items = self._fetch(conn, stmt, shape)
        return items, total

    def search(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        min_balance: Optional[Decimal] = None,
        shape: LoadShape = LoadShape.SUMMARY,
    ) -> List[Customer]:
        """
        Case-insensitive substring search on name and email, optionally
        restricted to customers whose invoice total is at least
        ``min_balance``. Criteria are ANDed; omitted ones are ignored.
        """
        stmt = select(customers)

        if name is not None:
            stmt = stmt.where(func.lower(customers.c.name).contains(name.lower(), autoescape=True))
        if email is not None:
            stmt = stmt.where(func.lower(customers.c.email).contains(email.lower(), autoescape=True))

        if min_balance is not None:
            # Balance is derived, so aggregate invoice totals per customer in the same query
            # SQLite sums NUMERIC as floats; round to cents to compare like Customer.balance
            totals = (
                select(
                    invoices.c.customer_id,
                    func.sum(invoices.c.amount).label("total"),
                )
                .group_by(invoices.c.customer_id)
                .subquery()
            )
            stmt = stmt.outerjoin(totals, totals.c.customer_id == customers.c.id).where(
                func.round(func.coalesce(totals.c.total, 0), 2, type_=Numeric(18, 2)) >= min_balance
            )

        return self._query(stmt.order_by(customers.c.id), shape)
