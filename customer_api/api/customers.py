# customer_api/api/customers.py
"""
Customer routes.

The same routes are mounted twice: ``/customers`` validates payloads with
the configured strategy and ``/customers-rules`` always uses the rule
builder.
"""

from decimal import Decimal
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from customer_api.api.deps import get_customer_service, get_rules_customer_service, json_body
from customer_api.mappings import customer_to_response, invoice_to_response, telephone_number_to_response
from customer_api.models.base import MessageOut
from customer_api.models.customers import CustomerOut, CustomerPageOut
from customer_api.models.invoices import InvoiceOut
from customer_api.models.telephone_numbers import TelephoneNumberOut
from customer_api.services import CustomerService


def build_router(prefix: str, get_service: Callable[..., CustomerService]) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["customers"])

    @router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
    def create_customer(
        response: Response,
        data: dict = Depends(json_body),
        service: CustomerService = Depends(get_service),
    ) -> CustomerOut:
        """
        Create a customer together with its invoices and phone numbers.
        """
        customer = service.create(data)
        response.headers["Location"] = f"{prefix}/{customer.id}"
        return customer_to_response(customer)

    @router.get("", response_model=List[CustomerOut])
    def list_customers(service: CustomerService = Depends(get_service)) -> List[CustomerOut]:
        """
        Return all customers with their invoices and phone numbers.
        """
        return [customer_to_response(c) for c in service.list()]

    @router.get("/paged", response_model=CustomerPageOut)
    def list_customers_paged(
        page: int = Query(1, ge=1),
        page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
        service: CustomerService = Depends(get_service),
    ) -> CustomerPageOut:
        items, total = service.get_paged(page, page_size)
        return CustomerPageOut(
            items=[customer_to_response(c) for c in items],
            total_count=total,
            page=page,
            page_size=page_size,
        )

    @router.get("/search", response_model=List[CustomerOut])
    def search_customers(
        name: Optional[str] = Query(None, description="Substring of the name (case-insensitive)"),
        email: Optional[str] = Query(None, description="Substring of the email (case-insensitive)"),
        min_balance: Optional[Decimal] = Query(None, alias="minBalance"),
        service: CustomerService = Depends(get_service),
    ) -> List[CustomerOut]:
        """
        Search customers; every supplied criterion must match.
        """
        found = service.search(name=name, email=email, min_balance=min_balance)
        return [customer_to_response(c) for c in found]

    @router.get("/{customer_id}", response_model=CustomerOut)
    def get_customer(
        customer_id: int,
        service: CustomerService = Depends(get_service),
    ) -> CustomerOut:
        return customer_to_response(service.get(customer_id))

    @router.put("/{customer_id}", response_model=CustomerOut)
    def update_customer(
        customer_id: int,
        data: dict = Depends(json_body),
        service: CustomerService = Depends(get_service),
    ) -> CustomerOut:
        """
        Replace a customer's name and email. Invoices and phone numbers are
        managed through their own endpoints.
        """
        return customer_to_response(service.update(customer_id, data))

    @router.delete("/{customer_id}", response_model=MessageOut)
    def delete_customer(
        customer_id: int,
        service: CustomerService = Depends(get_service),
    ) -> MessageOut:
        service.delete(customer_id)
        return MessageOut(message=f"Customer with id {customer_id} deleted successfully.")

    @router.get("/{customer_id}/invoices", response_model=List[InvoiceOut])
    def list_customer_invoices(
        customer_id: int,
        service: CustomerService = Depends(get_service),
    ) -> List[InvoiceOut]:
        return [invoice_to_response(i) for i in service.invoices_for(customer_id)]

    @router.get("/{customer_id}/phone-numbers", response_model=List[TelephoneNumberOut])
    def list_customer_phone_numbers(
        customer_id: int,
        service: CustomerService = Depends(get_service),
    ) -> List[TelephoneNumberOut]:
        return [telephone_number_to_response(p) for p in service.telephone_numbers_for(customer_id)]

    return router


router = build_router("/customers", get_customer_service)
rules_router = build_router("/customers-rules", get_rules_customer_service)
