# customer_api/services/invoice_service.py

import logging
from typing import Any, List, Optional

from customer_api.domain.entities import Invoice, LoadShape
from customer_api.domain.exceptions import ConflictError, NotFoundError, PersistenceError
from customer_api.mappings import apply_invoice_update, invoice_from_payload
from customer_api.models.invoices import InvoiceCreate, InvoiceUpdate
from customer_api.repositories import CustomerRepository, InvoiceRepository
from customer_api.services.payloads import validate_payload

logger = logging.getLogger(__name__)


class InvoiceService:
    def __init__(
        self,
        invoices: InvoiceRepository,
        customers: CustomerRepository,
        validation_strategy: Optional[str] = None,
    ):
        self.invoices = invoices
        self.customers = customers
        self.validation_strategy = validation_strategy

    def create(self, data: Any) -> Invoice:
        payload = validate_payload(InvoiceCreate, data, self.validation_strategy)
        logger.info("Creating invoice %s for customer %s", payload.invoice_number, payload.customer_id)

        if not self.customers.exists(payload.customer_id):
            raise NotFoundError("Customer", payload.customer_id, as_reference=True)
        if self.invoices.invoice_number_exists(payload.invoice_number):
            raise ConflictError.duplicate_invoice_number(payload.invoice_number)

        try:
            return self.invoices.create(invoice_from_payload(payload))
        except PersistenceError as exc:
            if not exc.constraint_violation:
                raise
            if self.invoices.invoice_number_exists(payload.invoice_number):
                raise ConflictError.duplicate_invoice_number(payload.invoice_number) from exc
            if not self.customers.exists(payload.customer_id):
                raise NotFoundError("Customer", payload.customer_id, as_reference=True) from exc
            raise

    def update(self, invoice_id: int, data: Any) -> Invoice:
        payload = validate_payload(InvoiceUpdate, data, self.validation_strategy)
        logger.info("Updating invoice %s", invoice_id)

        invoice = self.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        if self.invoices.invoice_number_exists(payload.invoice_number, exclude_id=invoice_id):
            raise ConflictError.duplicate_invoice_number(payload.invoice_number)

        apply_invoice_update(payload, invoice)
        try:
            return self.invoices.update(invoice)
        except PersistenceError as exc:
            if exc.constraint_violation and self.invoices.invoice_number_exists(
                payload.invoice_number, exclude_id=invoice_id
            ):
                raise ConflictError.duplicate_invoice_number(payload.invoice_number) from exc
            raise

    def get(self, invoice_id: int) -> Invoice:
        invoice = self.invoices.get_by_id(invoice_id, LoadShape.WITH_RELATIONS)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    def list(self) -> List[Invoice]:
        return self.invoices.get_all(LoadShape.WITH_RELATIONS)

    def delete(self, invoice_id: int) -> None:
        logger.info("Deleting invoice %s", invoice_id)
        if not self.invoices.delete(invoice_id):
            raise NotFoundError("Invoice", invoice_id)
