# customer_api/models/telephone_numbers.py

from typing import Optional

from pydantic import Field

from customer_api.domain.entities import TelephoneNumberType
from customer_api.models.base import RequiredStr, WireModel
from customer_api.validation.common import PHONE_NUMBER_MAX_LENGTH


class TelephoneNumberForCustomer(WireModel):
    type: TelephoneNumberType
    number: RequiredStr = Field(max_length=PHONE_NUMBER_MAX_LENGTH)


class TelephoneNumberCreate(TelephoneNumberForCustomer):
    customer_id: int = Field(gt=0)


class TelephoneNumberUpdate(TelephoneNumberForCustomer):
    pass


class TelephoneNumberOut(WireModel):
    id: Optional[int] = None
    customer_id: Optional[int] = None
    type: TelephoneNumberType
    number: str
    customer_name: Optional[str] = None
