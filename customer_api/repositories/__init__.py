# customer_api/repositories/__init__.py
"""
Persistence for customers, invoices and telephone numbers.

Repositories own every read and write against the store. Cross-row rules
that need the store (uniqueness, existence) are exposed as queries here and
sequenced by the services.
"""

from .customer_repository import CustomerRepository
from .invoice_repository import InvoiceRepository
from .telephone_number_repository import TelephoneNumberRepository

__all__ = ["CustomerRepository", "InvoiceRepository", "TelephoneNumberRepository"]
