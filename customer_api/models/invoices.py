# customer_api/models/invoices.py

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field

from customer_api.models.base import InvoiceNumberStr, Money, WireModel
from customer_api.validation.common import INVOICE_NUMBER_MAX_LENGTH


class InvoiceForCustomer(WireModel):
    """An invoice nested in a customer create payload; the owner is implied."""

    invoice_number: InvoiceNumberStr = Field(max_length=INVOICE_NUMBER_MAX_LENGTH)
    invoice_date: date
    amount: Decimal = Field(ge=0)


class InvoiceCreate(InvoiceForCustomer):
    customer_id: int = Field(gt=0)


class InvoiceUpdate(WireModel):
    invoice_number: InvoiceNumberStr = Field(max_length=INVOICE_NUMBER_MAX_LENGTH)
    invoice_date: date
    amount: Decimal = Field(ge=0)


class InvoiceOut(WireModel):
    # id and customer_id are unset until the invoice has been stored
    id: Optional[int] = None
    invoice_number: str
    customer_id: Optional[int] = None
    invoice_date: date
    amount: Money
    customer_name: Optional[str] = None
