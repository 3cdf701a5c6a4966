# customer_api/repositories/telephone_number_repository.py

from typing import List, Optional

from sqlalchemy import select, update

from customer_api.db.schema import customers, telephone_numbers
from customer_api.domain.entities import Customer, LoadShape, TelephoneNumber, TelephoneNumberType
from customer_api.domain.exceptions import NotFoundError
from customer_api.repositories.base import BaseRepository, translate_errors


def row_to_telephone_number(row) -> TelephoneNumber:
    return TelephoneNumber(
        id=row["id"],
        customer_id=row["customer_id"],
        type=TelephoneNumberType(row["type"]),
        number=row["number"],
    )


def telephone_number_values(telephone_number: TelephoneNumber) -> dict:
    return {
        "customer_id": telephone_number.customer_id,
        "type": TelephoneNumberType(telephone_number.type).value,
        "number": telephone_number.number,
    }


class TelephoneNumberRepository(BaseRepository):
    table = telephone_numbers
    entity_name = "telephone number"

    def _select(self, shape: LoadShape):
        if shape is LoadShape.WITH_RELATIONS:
            return select(
                telephone_numbers,
                customers.c.name.label("customer_name"),
                customers.c.email.label("customer_email"),
            ).select_from(telephone_numbers.join(customers))
        return select(telephone_numbers)

    def _fetch(self, stmt, shape: LoadShape) -> List[TelephoneNumber]:
        with translate_errors("select telephone number"):
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()

        found = []
        for row in rows:
            telephone_number = row_to_telephone_number(row)
            if shape is LoadShape.WITH_RELATIONS:
                telephone_number.customer = Customer(
                    id=row["customer_id"],
                    name=row["customer_name"],
                    email=row["customer_email"],
                )
            found.append(telephone_number)
        return found

    def create(self, telephone_number: TelephoneNumber) -> TelephoneNumber:
        with translate_errors("insert telephone number"):
            with self.engine.begin() as conn:
                result = conn.execute(
                    telephone_numbers.insert().values(**telephone_number_values(telephone_number))
                )
        telephone_number.id = result.inserted_primary_key[0]
        return telephone_number

    def get_by_id(
        self, telephone_number_id: int, shape: LoadShape = LoadShape.SUMMARY
    ) -> Optional[TelephoneNumber]:
        stmt = self._select(shape).where(telephone_numbers.c.id == telephone_number_id)
        found = self._fetch(stmt, shape)
        return found[0] if found else None

    def get_all(self, shape: LoadShape = LoadShape.SUMMARY) -> List[TelephoneNumber]:
        return self._fetch(self._select(shape).order_by(telephone_numbers.c.id), shape)

    def get_by_customer(self, customer_id: int) -> List[TelephoneNumber]:
        stmt = (
            select(telephone_numbers)
            .where(telephone_numbers.c.customer_id == customer_id)
            .order_by(telephone_numbers.c.id)
        )
        return self._fetch(stmt, LoadShape.SUMMARY)

    def update(self, telephone_number: TelephoneNumber) -> TelephoneNumber:
        stmt = (
            update(telephone_numbers)
            .where(telephone_numbers.c.id == telephone_number.id)
            .values(
                type=TelephoneNumberType(telephone_number.type).value,
                number=telephone_number.number,
            )
        )
        with translate_errors("update telephone number"):
            with self.engine.begin() as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    raise NotFoundError("Telephone number", telephone_number.id)
        return telephone_number
