# customer_api/repositories/invoice_repository.py

from typing import List, Optional

from sqlalchemy import select, update

from customer_api.db.schema import customers, invoices
from customer_api.domain.entities import Customer, Invoice, LoadShape
from customer_api.domain.exceptions import NotFoundError
from customer_api.repositories.base import BaseRepository, translate_errors


def row_to_invoice(row) -> Invoice:
    return Invoice(
        id=row["id"],
        invoice_number=row["invoice_number"],
        customer_id=row["customer_id"],
        invoice_date=row["invoice_date"],
        amount=row["amount"],
    )


def invoice_values(invoice: Invoice) -> dict:
    return {
        "invoice_number": invoice.invoice_number,
        "customer_id": invoice.customer_id,
        "invoice_date": invoice.invoice_date,
        "amount": invoice.amount,
    }


class InvoiceRepository(BaseRepository):
    table = invoices
    entity_name = "invoice"

    def _select(self, shape: LoadShape):
        if shape is LoadShape.WITH_RELATIONS:
            return select(
                invoices,
                customers.c.name.label("customer_name"),
                customers.c.email.label("customer_email"),
            ).select_from(invoices.join(customers))
        return select(invoices)

    def _to_entity(self, row, shape: LoadShape) -> Invoice:
        invoice = row_to_invoice(row)
        if shape is LoadShape.WITH_RELATIONS:
            invoice.customer = Customer(
                id=row["customer_id"],
                name=row["customer_name"],
                email=row["customer_email"],
            )
        return invoice

    def _fetch(self, stmt, shape: LoadShape) -> List[Invoice]:
        with translate_errors("select invoice"):
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        return [self._to_entity(row, shape) for row in rows]

    def create(self, invoice: Invoice) -> Invoice:
        with translate_errors("insert invoice"):
            with self.engine.begin() as conn:
                result = conn.execute(invoices.insert().values(**invoice_values(invoice)))
                invoice_id = result.inserted_primary_key[0]
        invoice.id = invoice_id
        return invoice

    def get_by_id(self, invoice_id: int, shape: LoadShape = LoadShape.SUMMARY) -> Optional[Invoice]:
        stmt = self._select(shape).where(invoices.c.id == invoice_id)
        found = self._fetch(stmt, shape)
        return found[0] if found else None

    def get_by_invoice_number(
        self, invoice_number: str, shape: LoadShape = LoadShape.SUMMARY
    ) -> Optional[Invoice]:
        stmt = self._select(shape).where(invoices.c.invoice_number == invoice_number)
        found = self._fetch(stmt, shape)
        return found[0] if found else None

    def get_all(self, shape: LoadShape = LoadShape.SUMMARY) -> List[Invoice]:
        return self._fetch(self._select(shape).order_by(invoices.c.id), shape)

    def get_by_customer(self, customer_id: int) -> List[Invoice]:
        stmt = (
            select(invoices)
            .where(invoices.c.customer_id == customer_id)
            .order_by(invoices.c.id)
        )
        return self._fetch(stmt, LoadShape.SUMMARY)

    def update(self, invoice: Invoice) -> Invoice:
        """Overwrite number, date and amount; the owning customer is left as is."""
        stmt = (
            update(invoices)
            .where(invoices.c.id == invoice.id)
            .values(
                invoice_number=invoice.invoice_number,
                invoice_date=invoice.invoice_date,
                amount=invoice.amount,
            )
        )
        with translate_errors("update invoice"):
            with self.engine.begin() as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    raise NotFoundError("Invoice", invoice.id)
        return invoice

    def invoice_number_exists(self, invoice_number: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(invoices.c.id).where(invoices.c.invoice_number == invoice_number)
        if exclude_id is not None:
            stmt = stmt.where(invoices.c.id != exclude_id)
        with translate_errors("select invoice"):
            with self.engine.connect() as conn:
                return conn.execute(stmt.limit(1)).first() is not None
