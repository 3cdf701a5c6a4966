# customer_api/services/telephone_number_service.py

import logging
from typing import Any, List, Optional

from customer_api.domain.entities import LoadShape, TelephoneNumber
from customer_api.domain.exceptions import NotFoundError, PersistenceError
from customer_api.mappings import apply_telephone_number_update, telephone_number_from_payload
from customer_api.models.telephone_numbers import TelephoneNumberCreate, TelephoneNumberUpdate
from customer_api.repositories import CustomerRepository, TelephoneNumberRepository
from customer_api.services.payloads import validate_payload

logger = logging.getLogger(__name__)


class TelephoneNumberService:
    def __init__(
        self,
        telephone_numbers: TelephoneNumberRepository,
        customers: CustomerRepository,
        validation_strategy: Optional[str] = None,
    ):
        self.telephone_numbers = telephone_numbers
        self.customers = customers
        self.validation_strategy = validation_strategy

    def create(self, data: Any) -> TelephoneNumber:
        payload = validate_payload(TelephoneNumberCreate, data, self.validation_strategy)
        logger.info("Creating %s number for customer %s", payload.type.value, payload.customer_id)

        if not self.customers.exists(payload.customer_id):
            raise NotFoundError("Customer", payload.customer_id, as_reference=True)

        try:
            return self.telephone_numbers.create(telephone_number_from_payload(payload))
        except PersistenceError as exc:
            # The customer was deleted between the check and the insert
            if exc.constraint_violation and not self.customers.exists(payload.customer_id):
                raise NotFoundError("Customer", payload.customer_id, as_reference=True) from exc
            raise

    def update(self, telephone_number_id: int, data: Any) -> TelephoneNumber:
        payload = validate_payload(TelephoneNumberUpdate, data, self.validation_strategy)
        logger.info("Updating telephone number %s", telephone_number_id)

        telephone_number = self.telephone_numbers.get_by_id(telephone_number_id)
        if telephone_number is None:
            raise NotFoundError("Telephone number", telephone_number_id)

        apply_telephone_number_update(payload, telephone_number)
        return self.telephone_numbers.update(telephone_number)

    def get(self, telephone_number_id: int) -> TelephoneNumber:
        telephone_number = self.telephone_numbers.get_by_id(
            telephone_number_id, LoadShape.WITH_RELATIONS
        )
        if telephone_number is None:
            raise NotFoundError("Telephone number", telephone_number_id)
        return telephone_number

    def list(self) -> List[TelephoneNumber]:
        return self.telephone_numbers.get_all(LoadShape.WITH_RELATIONS)

    def delete(self, telephone_number_id: int) -> None:
        logger.info("Deleting telephone number %s", telephone_number_id)
        if not self.telephone_numbers.delete(telephone_number_id):
            raise NotFoundError("Telephone number", telephone_number_id)
