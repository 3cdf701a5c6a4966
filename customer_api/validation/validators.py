# customer_api/validation/validators.py

from typing import Optional, Type, Union

from pydantic import BaseModel

from customer_api.config import get_settings
from customer_api.validation.declarative import DeclarativeValidator
from customer_api.validation.rules import RuleSetValidator

PayloadValidator = Union[DeclarativeValidator, RuleSetValidator]


def get_validator(model_cls: Type[BaseModel], strategy: Optional[str] = None) -> PayloadValidator:
    """
    Return a validator for ``model_cls``.

    ``strategy`` defaults to the configured VALIDATION_STRATEGY.
    """
    strategy = strategy or get_settings().validation_strategy
    if strategy == "declarative":
        return DeclarativeValidator(model_cls)
    if strategy == "rules":
        return RuleSetValidator(model_cls)
    raise ValueError(f"Unknown validation strategy: {strategy!r}")
