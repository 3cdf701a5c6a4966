# customer_api/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from customer_api.api.deps import get_invoice_service, json_body
from customer_api.mappings import invoice_to_response
from customer_api.models.base import MessageOut
from customer_api.models.invoices import InvoiceOut
from customer_api.services import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceOut, status_code=status.HTTP_201_CREATED)
def create_invoice(
    response: Response,
    data: dict = Depends(json_body),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceOut:
    """
    Create an invoice for an existing customer. The invoice number must be
    unique across all customers.
    """
    invoice = service.create(data)
    response.headers["Location"] = f"/invoices/{invoice.id}"
    return invoice_to_response(invoice)


@router.get("", response_model=List[InvoiceOut])
def list_invoices(service: InvoiceService = Depends(get_invoice_service)) -> List[InvoiceOut]:
    return [invoice_to_response(i) for i in service.list()]


@router.get("/{invoice_id}", response_model=InvoiceOut)
def get_invoice(
    invoice_id: int,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceOut:
    return invoice_to_response(service.get(invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceOut)
def update_invoice(
    invoice_id: int,
    data: dict = Depends(json_body),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceOut:
    return invoice_to_response(service.update(invoice_id, data))


@router.delete("/{invoice_id}", response_model=MessageOut)
def delete_invoice(
    invoice_id: int,
    service: InvoiceService = Depends(get_invoice_service),
) -> MessageOut:
    service.delete(invoice_id)
    return MessageOut(message=f"Invoice with id {invoice_id} deleted successfully.")
