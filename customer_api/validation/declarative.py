# customer_api/validation/declarative.py
"""
Declarative validation: the constraints live on the pydantic payload
models, this module only runs them and reshapes the errors.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel

from customer_api.domain.exceptions import ValidationError
from customer_api.validation.common import ErrorMap, add_error, format_path

P = TypeVar("P", bound=BaseModel)


@dataclass
class ValidationOutcome(Generic[P]):
    errors: ErrorMap = field(default_factory=dict)
    payload: Optional[P] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> P:
        if self.errors:
            raise ValidationError(self.errors)
        return self.payload


def errors_from_pydantic(exc: pydantic.ValidationError) -> ErrorMap:
    errors: ErrorMap = {}
    for error in exc.errors():
        add_error(errors, format_path(error["loc"]), error["msg"])
    return errors


class DeclarativeValidator(Generic[P]):
    """Validates raw decoded JSON against a pydantic payload model."""

    strategy = "declarative"

    def __init__(self, model_cls: Type[P]):
        self.model_cls = model_cls

    def validate(self, data: Any) -> ValidationOutcome[P]:
        try:
            payload = self.model_cls.model_validate(data)
        except pydantic.ValidationError as exc:
            return ValidationOutcome(errors=errors_from_pydantic(exc))
        return ValidationOutcome(payload=payload)
