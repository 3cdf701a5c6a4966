# customer_api/mappings.py
"""
Conversions between wire payloads, entities and responses.

Everything here is pure: no I/O and no validation (payloads have already
been validated by the time they reach these functions).
"""

from decimal import ROUND_HALF_UP, Decimal

from customer_api.domain.entities import Customer, Invoice, TelephoneNumber
from customer_api.models.customers import CustomerCreate, CustomerOut, CustomerUpdate
from customer_api.models.invoices import InvoiceForCustomer, InvoiceOut, InvoiceUpdate
from customer_api.models.telephone_numbers import (
    TelephoneNumberForCustomer,
    TelephoneNumberOut,
    TelephoneNumberUpdate,
)

CENT = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    """Round to the 2 fractional digits amounts are stored with."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# ---- payload -> entity ----

def invoice_from_payload(payload: InvoiceForCustomer) -> Invoice:
    # customer_id stays unset for invoices nested in a customer payload;
    # the repository fills it in when the customer is created.
    return Invoice(
        invoice_number=payload.invoice_number,
        invoice_date=payload.invoice_date,
        amount=to_money(payload.amount),
        customer_id=getattr(payload, "customer_id", None),
    )


def telephone_number_from_payload(payload: TelephoneNumberForCustomer) -> TelephoneNumber:
    return TelephoneNumber(
        type=payload.type,
        number=payload.number,
        customer_id=getattr(payload, "customer_id", None),
    )


def customer_from_payload(payload: CustomerCreate) -> Customer:
    return Customer(
        name=payload.name,
        email=payload.email,
        invoices=[invoice_from_payload(i) for i in payload.invoices or []],
        phone_numbers=[telephone_number_from_payload(p) for p in payload.phone_numbers or []],
    )


# ---- payload merged into an existing entity ----

def apply_customer_update(payload: CustomerUpdate, customer: Customer) -> Customer:
    customer.name = payload.name
    customer.email = payload.email
    return customer


def apply_invoice_update(payload: InvoiceUpdate, invoice: Invoice) -> Invoice:
    invoice.invoice_number = payload.invoice_number
    invoice.invoice_date = payload.invoice_date
    invoice.amount = to_money(payload.amount)
    return invoice


def apply_telephone_number_update(
    payload: TelephoneNumberUpdate, telephone_number: TelephoneNumber
) -> TelephoneNumber:
    telephone_number.type = payload.type
    telephone_number.number = payload.number
    return telephone_number


# ---- entity -> response ----

def invoice_to_response(invoice: Invoice) -> InvoiceOut:
    return InvoiceOut(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        customer_id=invoice.customer_id,
        invoice_date=invoice.invoice_date,
        amount=invoice.amount,
        customer_name=invoice.customer.name if invoice.customer else None,
    )


def telephone_number_to_response(telephone_number: TelephoneNumber) -> TelephoneNumberOut:
    return TelephoneNumberOut(
        id=telephone_number.id,
        customer_id=telephone_number.customer_id,
        type=telephone_number.type,
        number=telephone_number.number,
        customer_name=telephone_number.customer.name if telephone_number.customer else None,
    )


def customer_to_response(customer: Customer) -> CustomerOut:
    invoices = None
    if customer.invoices is not None:
        invoices = [invoice_to_response(i) for i in customer.invoices]

    phone_numbers = None
    if customer.phone_numbers is not None:
        phone_numbers = [telephone_number_to_response(p) for p in customer.phone_numbers]

    return CustomerOut(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        balance=to_money(customer.balance),
        invoices=invoices,
        phone_numbers=phone_numbers,
    )
