# customer_api/api/deps.py
"""
FastAPI dependencies: request body decoding, repositories and services.

Tests swap the store by overriding ``get_engine``.
"""

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from customer_api.config import Settings, get_settings
from customer_api.db.engine import get_engine
from customer_api.repositories import CustomerRepository, InvoiceRepository, TelephoneNumberRepository
from customer_api.services import CustomerService, InvoiceService, TelephoneNumberService
from customer_api.services.payloads import decode_json


async def json_body(request: Request) -> dict:
    return decode_json(await request.body())


def get_customer_repository(engine: Engine = Depends(get_engine)) -> CustomerRepository:
    return CustomerRepository(engine)


def get_invoice_repository(engine: Engine = Depends(get_engine)) -> InvoiceRepository:
    return InvoiceRepository(engine)


def get_telephone_number_repository(engine: Engine = Depends(get_engine)) -> TelephoneNumberRepository:
    return TelephoneNumberRepository(engine)


def get_customer_service(
    customers: CustomerRepository = Depends(get_customer_repository),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    telephone_numbers: TelephoneNumberRepository = Depends(get_telephone_number_repository),
    settings: Settings = Depends(get_settings),
) -> CustomerService:
    return CustomerService(customers, invoices, telephone_numbers, settings.validation_strategy)


def get_invoice_service(
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    customers: CustomerRepository = Depends(get_customer_repository),
    settings: Settings = Depends(get_settings),
) -> InvoiceService:
    return InvoiceService(invoices, customers, settings.validation_strategy)


def get_telephone_number_service(
    telephone_numbers: TelephoneNumberRepository = Depends(get_telephone_number_repository),
    customers: CustomerRepository = Depends(get_customer_repository),
    settings: Settings = Depends(get_settings),
) -> TelephoneNumberService:
    return TelephoneNumberService(telephone_numbers, customers, settings.validation_strategy)


def get_rules_customer_service(
    customers: CustomerRepository = Depends(get_customer_repository),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    telephone_numbers: TelephoneNumberRepository = Depends(get_telephone_number_repository),
) -> CustomerService:
    return CustomerService(customers, invoices, telephone_numbers, "rules")
