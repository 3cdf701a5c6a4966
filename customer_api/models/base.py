# customer_api/models/base.py

from decimal import Decimal
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel

from customer_api.validation.common import INVOICE_NUMBER_PREFIX, is_blank, is_valid_email


def _required(value: str) -> str:
    if is_blank(value):
        raise ValueError("must not be empty")
    return value


def _email(value: str) -> str:
    if not is_valid_email(value):
        raise ValueError("is not a valid email address")
    return value


def _invoice_prefix(value: str) -> str:
    if not value.startswith(INVOICE_NUMBER_PREFIX):
        raise ValueError(f"must start with '{INVOICE_NUMBER_PREFIX}'")
    return value


RequiredStr = Annotated[str, AfterValidator(_required)]
EmailAddress = Annotated[str, AfterValidator(_required), AfterValidator(_email)]
InvoiceNumberStr = Annotated[str, AfterValidator(_required), AfterValidator(_invoice_prefix)]

# Amounts go out as JSON numbers; in Python they stay Decimal
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    """
    Base for JSON payloads: camelCase on the wire, snake_case in Python.

    Incoming property names are matched case-insensitively, so ``Name``,
    ``NAME`` and ``name`` all bind to ``name``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        canonical = {}
        for name, info in cls.model_fields.items():
            alias = info.alias or name
            canonical[name.lower()] = alias
            canonical[alias.lower()] = alias

        matched = {}
        for key, value in data.items():
            if isinstance(key, str):
                key = canonical.get(key.lower(), key)
            matched[key] = value
        return matched


class MessageOut(BaseModel):
    message: str
