"""
Tests for request body decoding
"""

import pytest

from customer_api.domain.exceptions import MalformedRequestError, ValidationError
from customer_api.models.customers import CustomerUpdate
from customer_api.services.payloads import (
    EMPTY_BODY_MESSAGE,
    INVALID_JSON_MESSAGE,
    decode_json,
    validate_payload,
)


class TestDecodeJson:
    def test_object(self):
        assert decode_json(b'{"name": "Test"}') == {"name": "Test"}

    @pytest.mark.parametrize("body", [b"", b"   ", b"null"])
    def test_empty_body(self, body):
        with pytest.raises(MalformedRequestError) as exc_info:
            decode_json(body)

        assert exc_info.value.message == EMPTY_BODY_MESSAGE

    @pytest.mark.parametrize("body", [b"{not json", b'{"name": }', b"[1, 2]", b'"text"', b"\xff\xfe"])
    def test_invalid_json(self, body):
        with pytest.raises(MalformedRequestError) as exc_info:
            decode_json(body)

        assert exc_info.value.message == INVALID_JSON_MESSAGE


class TestValidatePayload:
    def test_returns_parsed_model(self, validation_strategy):
        payload = validate_payload(
            CustomerUpdate, {"NAME": "Test", "Email": "test@company.com"}, validation_strategy
        )

        assert payload.name == "Test"
        assert payload.email == "test@company.com"

    def test_raises_with_field_errors(self, validation_strategy):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(CustomerUpdate, {"name": "Test"}, validation_strategy)

        assert list(exc_info.value.errors) == ["email"]
