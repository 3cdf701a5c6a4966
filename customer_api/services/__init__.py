# customer_api/services/__init__.py
"""
Request pipelines: validate the payload, run the existence and uniqueness
checks, persist through the repositories. Services return entities and
signal failures with ``customer_api.domain.exceptions``; shaping HTTP
responses is left to the routers.
"""

from .customer_service import CustomerService
from .invoice_service import InvoiceService
from .telephone_number_service import TelephoneNumberService

__all__ = ["CustomerService", "InvoiceService", "TelephoneNumberService"]
