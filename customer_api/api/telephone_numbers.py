# customer_api/api/telephone_numbers.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from customer_api.api.deps import get_telephone_number_service, json_body
from customer_api.mappings import telephone_number_to_response
from customer_api.models.base import MessageOut
from customer_api.models.telephone_numbers import TelephoneNumberOut
from customer_api.services import TelephoneNumberService

router = APIRouter(prefix="/telephone-numbers", tags=["telephone-numbers"])


@router.post("", response_model=TelephoneNumberOut, status_code=status.HTTP_201_CREATED)
def create_telephone_number(
    response: Response,
    data: dict = Depends(json_body),
    service: TelephoneNumberService = Depends(get_telephone_number_service),
) -> TelephoneNumberOut:
    telephone_number = service.create(data)
    response.headers["Location"] = f"/telephone-numbers/{telephone_number.id}"
    return telephone_number_to_response(telephone_number)


@router.get("", response_model=List[TelephoneNumberOut])
def list_telephone_numbers(
    service: TelephoneNumberService = Depends(get_telephone_number_service),
) -> List[TelephoneNumberOut]:
    return [telephone_number_to_response(p) for p in service.list()]


@router.get("/{telephone_number_id}", response_model=TelephoneNumberOut)
def get_telephone_number(
    telephone_number_id: int,
    service: TelephoneNumberService = Depends(get_telephone_number_service),
) -> TelephoneNumberOut:
    return telephone_number_to_response(service.get(telephone_number_id))


@router.put("/{telephone_number_id}", response_model=TelephoneNumberOut)
def update_telephone_number(
    telephone_number_id: int,
    data: dict = Depends(json_body),
    service: TelephoneNumberService = Depends(get_telephone_number_service),
) -> TelephoneNumberOut:
    return telephone_number_to_response(service.update(telephone_number_id, data))


@router.delete("/{telephone_number_id}", response_model=MessageOut)
def delete_telephone_number(
    telephone_number_id: int,
    service: TelephoneNumberService = Depends(get_telephone_number_service),
) -> MessageOut:
    service.delete(telephone_number_id)
    return MessageOut(
        message=f"Telephone number with id {telephone_number_id} deleted successfully."
    )
