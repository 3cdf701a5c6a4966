# customer_api/models/customers.py

from typing import List, Optional

from pydantic import Field

from customer_api.models.base import EmailAddress, Money, RequiredStr, WireModel
from customer_api.models.invoices import InvoiceForCustomer, InvoiceOut
from customer_api.models.telephone_numbers import TelephoneNumberForCustomer, TelephoneNumberOut
from customer_api.validation.common import CUSTOMER_EMAIL_MAX_LENGTH, CUSTOMER_NAME_MAX_LENGTH


class CustomerCreate(WireModel):
    name: RequiredStr = Field(max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: EmailAddress = Field(max_length=CUSTOMER_EMAIL_MAX_LENGTH)
    invoices: Optional[List[InvoiceForCustomer]] = None
    phone_numbers: Optional[List[TelephoneNumberForCustomer]] = None


class CustomerUpdate(WireModel):
    name: RequiredStr = Field(max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: EmailAddress = Field(max_length=CUSTOMER_EMAIL_MAX_LENGTH)


class CustomerOut(WireModel):
    id: Optional[int] = None
    name: str
    email: str
    balance: Money
    invoices: Optional[List[InvoiceOut]] = None
    phone_numbers: Optional[List[TelephoneNumberOut]] = None


class CustomerPageOut(WireModel):
    items: List[CustomerOut]
    total_count: int
    page: int
    page_size: int
