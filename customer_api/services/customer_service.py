# customer_api/services/customer_service.py

import logging
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from customer_api.domain.entities import Customer, Invoice, LoadShape, TelephoneNumber
from customer_api.domain.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from customer_api.mappings import apply_customer_update, customer_from_payload
from customer_api.models.customers import CustomerCreate, CustomerUpdate
from customer_api.repositories import CustomerRepository, InvoiceRepository, TelephoneNumberRepository
from customer_api.services.payloads import validate_payload

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(
        self,
        customers: CustomerRepository,
        invoices: InvoiceRepository,
        telephone_numbers: TelephoneNumberRepository,
        validation_strategy: Optional[str] = None,
    ):
        self.customers = customers
        self.invoices = invoices
        self.telephone_numbers = telephone_numbers
        self.validation_strategy = validation_strategy

    def _check_invoice_numbers(self, numbers: List[str]) -> None:
        seen = set()
        for number in numbers:
            if number in seen or self.invoices.invoice_number_exists(number):
                raise ConflictError.duplicate_invoice_number(number)
            seen.add(number)

    def create(self, data: Any) -> Customer:
        """
        Validate a create payload and persist the customer with its
        invoices and phone numbers.
        """
        payload = validate_payload(CustomerCreate, data, self.validation_strategy)
        logger.info("Creating customer with email %s", payload.email)

        if self.customers.email_exists(payload.email):
            raise ConflictError.duplicate_email(payload.email)

        customer = customer_from_payload(payload)
        self._check_invoice_numbers([i.invoice_number for i in customer.invoices])

        try:
            return self.customers.create(customer)
        except PersistenceError as exc:
            if not exc.constraint_violation:
                raise
            # Lost a race with a concurrent create; report it like the pre-check would.
            if self.customers.email_exists(payload.email):
                raise ConflictError.duplicate_email(payload.email) from exc
            self._check_invoice_numbers([i.invoice_number for i in customer.invoices])
            raise

    def update(self, customer_id: int, data: Any) -> Customer:
        payload = validate_payload(CustomerUpdate, data, self.validation_strategy)
        logger.info("Updating customer %s", customer_id)

        customer = self.customers.get_by_id(customer_id, LoadShape.WITH_RELATIONS)
        if customer is None:
            raise NotFoundError("Customer", customer_id)

        if self.customers.email_exists(payload.email, exclude_id=customer_id):
            raise ConflictError.duplicate_email(payload.email)

        apply_customer_update(payload, customer)
        try:
            return self.customers.update(customer)
        except PersistenceError as exc:
            if exc.constraint_violation and self.customers.email_exists(
                payload.email, exclude_id=customer_id
            ):
                raise ConflictError.duplicate_email(payload.email) from exc
            raise

    def get(self, customer_id: int) -> Customer:
        customer = self.customers.get_by_id(customer_id, LoadShape.WITH_RELATIONS)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def list(self) -> List[Customer]:
        return self.customers.get_all(LoadShape.WITH_RELATIONS)

    def delete(self, customer_id: int) -> None:
        logger.info("Deleting customer %s", customer_id)
        if not self.customers.delete(customer_id):
            raise NotFoundError("Customer", customer_id)

    def get_paged(self, page: int, page_size: int) -> Tuple[List[Customer], int]:
        errors = {}
        if page < 1:
            errors["page"] = ["'Page' must be greater than '0'."]
        if page_size < 1:
            errors["pageSize"] = ["'Page Size' must be greater than '0'."]
        if errors:
            raise ValidationError(errors)
        return self.customers.get_paged(page, page_size, LoadShape.WITH_RELATIONS)

    def search(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        min_balance: Optional[Decimal] = None,
    ) -> List[Customer]:
        return self.customers.search(
            name=name, email=email, min_balance=min_balance, shape=LoadShape.WITH_RELATIONS
        )

    def invoices_for(self, customer_id: int) -> List[Invoice]:
        if not self.customers.exists(customer_id):
            raise NotFoundError("Customer", customer_id)
        return self.invoices.get_by_customer(customer_id)

    def telephone_numbers_for(self, customer_id: int) -> List[TelephoneNumber]:
        if not self.customers.exists(customer_id):
            raise NotFoundError("Customer", customer_id)
        return self.telephone_numbers.get_by_customer(customer_id)
