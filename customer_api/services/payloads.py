# customer_api/services/payloads.py

import json
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

from customer_api.domain.exceptions import MalformedRequestError
from customer_api.validation.validators import get_validator

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)

INVALID_JSON_MESSAGE = "Invalid JSON payload."
EMPTY_BODY_MESSAGE = "Request body is empty or could not be deserialized."


def decode_json(body: bytes) -> dict:
    """
    Decode a request body into a JSON object.

    Malformed JSON (or JSON that is not an object) and an empty / ``null``
    body raise MalformedRequestError with distinct messages.
    """
    if not body or not body.strip():
        raise MalformedRequestError(EMPTY_BODY_MESSAGE)
    try:
        data = json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        logger.warning("Invalid JSON: %s", exc)
        raise MalformedRequestError(INVALID_JSON_MESSAGE) from exc
    if data is None:
        raise MalformedRequestError(EMPTY_BODY_MESSAGE)
    if not isinstance(data, dict):
        raise MalformedRequestError(INVALID_JSON_MESSAGE)
    return data


def validate_payload(model_cls: Type[P], data: Any, strategy: Optional[str] = None) -> P:
    """Run ``data`` through the configured validator; raises ValidationError."""
    outcome = get_validator(model_cls, strategy).validate(data)
    if not outcome.is_valid:
        logger.warning("%s failed validation: %s", model_cls.__name__, outcome.errors)
    return outcome.raise_for_errors()
