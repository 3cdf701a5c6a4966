# customer_api/domain/entities.py
"""
In-memory representation of persisted customers, invoices and telephone
numbers.

Entities are plain dataclasses. Repositories build them from rows and the
mapping layer builds them from payloads; neither HTTP nor SQLAlchemy types
leak in here.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class LoadShape(str, Enum):
    """
    The two ways an entity can be read back from a repository.

    SUMMARY returns the row alone. WITH_RELATIONS also loads the related
    rows: a customer's invoices and phone numbers, or the owning customer
    of an invoice / telephone number.
    """

    SUMMARY = "summary"
    WITH_RELATIONS = "with_relations"


class TelephoneNumberType(str, Enum):
    MOBILE = "Mobile"
    WORK = "Work"
    DIRECT_DIAL = "DirectDial"


@dataclass
class Invoice:
    invoice_number: str
    invoice_date: date
    amount: Decimal
    customer_id: Optional[int] = None
    id: Optional[int] = None
    # Only set when read with LoadShape.WITH_RELATIONS.
    customer: Optional["Customer"] = field(default=None, repr=False, compare=False)


@dataclass
class TelephoneNumber:
    type: TelephoneNumberType
    number: str
    customer_id: Optional[int] = None
    id: Optional[int] = None
    customer: Optional["Customer"] = field(default=None, repr=False, compare=False)


@dataclass
class Customer:
    """
    A customer and, when loaded, the invoices and phone numbers it owns.

    ``invoices`` / ``phone_numbers`` are None when the customer was read
    with LoadShape.SUMMARY. ``balance`` is derived from ``invoices`` on
    every access and is only meaningful when ``invoices_loaded`` is true;
    a summary-shaped customer reports a balance of 0.
    """

    name: str
    email: str
    id: Optional[int] = None
    invoices: Optional[List[Invoice]] = None
    phone_numbers: Optional[List[TelephoneNumber]] = None

    @property
    def invoices_loaded(self) -> bool:
        return self.invoices is not None

    @property
    def balance(self) -> Decimal:
        if not self.invoices:
            return Decimal("0")
        return sum((invoice.amount for invoice in self.invoices), Decimal("0"))
