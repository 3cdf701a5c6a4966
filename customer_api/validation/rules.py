# customer_api/validation/rules.py
"""
Composable rule-builder validation.

Rules are declared in code rather than on the payload models:

    rules = RuleSet("Customer")
    rules.rule_for("name").not_empty().of_type(str, "string").max_length(200)
    rules.rule_for("invoices").when_present().for_each(INVOICE_RULES)

Each property chain stops at its first failing check. Property names are
looked up case-insensitively, by wire (camelCase) or Python (snake_case)
name. A payload that passes its rule set is then parsed into the same
pydantic model the declarative strategy uses.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel, TypeAdapter
from pydantic.alias_generators import to_snake

from customer_api.domain.entities import TelephoneNumberType
from customer_api.models.customers import CustomerCreate, CustomerUpdate
from customer_api.models.invoices import InvoiceCreate, InvoiceForCustomer, InvoiceUpdate
from customer_api.models.telephone_numbers import (
    TelephoneNumberCreate,
    TelephoneNumberForCustomer,
    TelephoneNumberUpdate,
)
from customer_api.validation.common import (
    CUSTOMER_EMAIL_MAX_LENGTH,
    CUSTOMER_NAME_MAX_LENGTH,
    INVOICE_NUMBER_MAX_LENGTH,
    INVOICE_NUMBER_PREFIX,
    PHONE_NUMBER_MAX_LENGTH,
    ErrorMap,
    add_error,
    is_blank,
    is_valid_email,
)
from customer_api.validation.declarative import ValidationOutcome, errors_from_pydantic

P = TypeVar("P", bound=BaseModel)

_MISSING = object()


class RuleFailure(Exception):
    pass


def _label(name: str) -> str:
    # "invoiceNumber" -> "Invoice Number"
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name)
    return spaced[:1].upper() + spaced[1:]


class PropertyRule:
    """A single property and the ordered checks its value must pass."""

    def __init__(self, name: str, label: Optional[str] = None):
        self.name = name
        self.label = label or _label(name)
        self.keys = {name.lower(), to_snake(name).lower()}
        self._steps: List[Callable[[Any], Any]] = []
        self._optional = False
        self._each: Optional["RuleSet"] = None

    def _then(self, step: Callable[[Any], Any]) -> "PropertyRule":
        self._steps.append(step)
        return self

    def must(self, predicate: Callable[[Any], bool], message: str) -> "PropertyRule":
        def step(value):
            if not predicate(value):
                raise RuleFailure(message)
            return value

        return self._then(step)

    def when_present(self) -> "PropertyRule":
        """Skip the chain when the property is missing or null."""
        self._optional = True
        return self

    def not_null(self) -> "PropertyRule":
        return self.must(
            lambda v: v is not _MISSING and v is not None,
            f"'{self.label}' must not be empty.",
        )

    def not_empty(self) -> "PropertyRule":
        return self.must(
            lambda v: v is not _MISSING and not is_blank(v),
            f"'{self.label}' must not be empty.",
        )

    def of_type(self, python_type: Any, type_name: str) -> "PropertyRule":
        """Coerce the value the way the payload model would; later checks see the result."""
        adapter = TypeAdapter(python_type)

        def step(value):
            try:
                return adapter.validate_python(value)
            except pydantic.ValidationError:
                raise RuleFailure(f"'{self.label}' is not a valid {type_name}.") from None

        return self._then(step)

    def max_length(self, limit: int) -> "PropertyRule":
        def step(value):
            if len(value) > limit:
                raise RuleFailure(
                    f"The length of '{self.label}' must be {limit} characters or fewer. "
                    f"You entered {len(value)} characters."
                )
            return value

        return self._then(step)

    def starts_with(self, prefix: str) -> "PropertyRule":
        return self.must(
            lambda v: v.startswith(prefix),
            f"'{self.label}' must start with '{prefix}'.",
        )

    def email_address(self) -> "PropertyRule":
        return self.must(is_valid_email, f"'{self.label}' is not a valid email address.")

    def greater_than(self, bound: Any) -> "PropertyRule":
        return self.must(lambda v: v > bound, f"'{self.label}' must be greater than '{bound}'.")

    def greater_than_or_equal_to(self, bound: Any) -> "PropertyRule":
        return self.must(
            lambda v: v >= bound,
            f"'{self.label}' must be greater than or equal to '{bound}'.",
        )

    def is_in(self, allowed: Iterable[str]) -> "PropertyRule":
        allowed = tuple(allowed)
        return self.must(
            lambda v: isinstance(v, str) and v in allowed,
            f"'{self.label}' must be one of: {', '.join(allowed)}.",
        )

    def for_each(self, rule_set: "RuleSet") -> "PropertyRule":
        """Validate every element of a list property with ``rule_set``."""
        self._each = rule_set
        return self.must(lambda v: isinstance(v, list), f"'{self.label}' must be a list.")

    def run(self, value: Any, path: str, errors: ErrorMap) -> None:
        if self._optional and (value is _MISSING or value is None):
            return
        for step in self._steps:
            try:
                value = step(value)
            except RuleFailure as failure:
                add_error(errors, path, str(failure))
                return
        if self._each is not None:
            for index, item in enumerate(value):
                self._each.run(item, f"{path}[{index}]", errors)


class RuleSet:
    """An ordered collection of property rules for one payload shape."""

    def __init__(self, name: str):
        self.name = name
        self._rules: List[PropertyRule] = []

    def rule_for(self, name: str, label: Optional[str] = None) -> PropertyRule:
        rule = PropertyRule(name, label)
        self._rules.append(rule)
        return rule

    def include(self, other: "RuleSet") -> "RuleSet":
        self._rules.extend(other._rules)
        return self

    def run(self, data: Any, prefix: str, errors: ErrorMap) -> None:
        if not isinstance(data, dict):
            add_error(errors, prefix, f"'{self.name}' must be a JSON object.")
            return
        for rule in self._rules:
            rule.run(_lookup(data, rule.keys), f"{prefix}.{rule.name}" if prefix else rule.name, errors)

    def validate(self, data: Any) -> ErrorMap:
        errors: ErrorMap = {}
        self.run(data, "", errors)
        return errors


def _lookup(data: Dict[Any, Any], keys: set) -> Any:
    # Last matching key wins, as with a case-insensitive JSON decoder.
    value = _MISSING
    for key, item in data.items():
        if isinstance(key, str) and key.lower() in keys:
            value = item
    return value


INVOICE_FIELD_RULES = RuleSet("Invoice")
INVOICE_FIELD_RULES.rule_for("invoiceNumber").not_empty().of_type(str, "string").max_length(
    INVOICE_NUMBER_MAX_LENGTH
).starts_with(INVOICE_NUMBER_PREFIX)
INVOICE_FIELD_RULES.rule_for("invoiceDate").not_null().of_type(date, "date")
INVOICE_FIELD_RULES.rule_for("amount").not_null().of_type(Decimal, "number").greater_than_or_equal_to(0)

INVOICE_FOR_CUSTOMER_RULES = RuleSet("Invoice").include(INVOICE_FIELD_RULES)
INVOICE_UPDATE_RULES = RuleSet("Invoice").include(INVOICE_FIELD_RULES)

INVOICE_CREATE_RULES = RuleSet("Invoice").include(INVOICE_FIELD_RULES)
INVOICE_CREATE_RULES.rule_for("customerId").not_null().of_type(int, "integer").greater_than(0)

TELEPHONE_NUMBER_FIELD_RULES = RuleSet("Telephone Number")
TELEPHONE_NUMBER_FIELD_RULES.rule_for("type").not_empty().is_in(t.value for t in TelephoneNumberType)
TELEPHONE_NUMBER_FIELD_RULES.rule_for("number").not_empty().of_type(str, "string").max_length(
    PHONE_NUMBER_MAX_LENGTH
)

TELEPHONE_NUMBER_FOR_CUSTOMER_RULES = RuleSet("Telephone Number").include(TELEPHONE_NUMBER_FIELD_RULES)
TELEPHONE_NUMBER_UPDATE_RULES = RuleSet("Telephone Number").include(TELEPHONE_NUMBER_FIELD_RULES)

TELEPHONE_NUMBER_CREATE_RULES = RuleSet("Telephone Number").include(TELEPHONE_NUMBER_FIELD_RULES)
TELEPHONE_NUMBER_CREATE_RULES.rule_for("customerId").not_null().of_type(int, "integer").greater_than(0)

CUSTOMER_FIELD_RULES = RuleSet("Customer")
CUSTOMER_FIELD_RULES.rule_for("name").not_empty().of_type(str, "string").max_length(CUSTOMER_NAME_MAX_LENGTH)
CUSTOMER_FIELD_RULES.rule_for("email").not_empty().of_type(str, "string").max_length(
    CUSTOMER_EMAIL_MAX_LENGTH
).email_address()

CUSTOMER_UPDATE_RULES = RuleSet("Customer").include(CUSTOMER_FIELD_RULES)

CUSTOMER_CREATE_RULES = RuleSet("Customer").include(CUSTOMER_FIELD_RULES)
CUSTOMER_CREATE_RULES.rule_for("invoices").when_present().for_each(INVOICE_FOR_CUSTOMER_RULES)
CUSTOMER_CREATE_RULES.rule_for("phoneNumbers").when_present().for_each(TELEPHONE_NUMBER_FOR_CUSTOMER_RULES)

RULE_SETS: Dict[Type[BaseModel], RuleSet] = {
    CustomerCreate: CUSTOMER_CREATE_RULES,
    CustomerUpdate: CUSTOMER_UPDATE_RULES,
    InvoiceForCustomer: INVOICE_FOR_CUSTOMER_RULES,
    InvoiceCreate: INVOICE_CREATE_RULES,
    InvoiceUpdate: INVOICE_UPDATE_RULES,
    TelephoneNumberForCustomer: TELEPHONE_NUMBER_FOR_CUSTOMER_RULES,
    TelephoneNumberCreate: TELEPHONE_NUMBER_CREATE_RULES,
    TelephoneNumberUpdate: TELEPHONE_NUMBER_UPDATE_RULES,
}


class RuleSetValidator(Generic[P]):
    """Runs a rule set, then parses the payload into ``model_cls``."""

    strategy = "rules"

    def __init__(self, model_cls: Type[P], rule_set: Optional[RuleSet] = None):
        self.model_cls = model_cls
        self.rule_set = rule_set or RULE_SETS[model_cls]

    def validate(self, data: Any) -> ValidationOutcome[P]:
        errors = self.rule_set.validate(data)
        if errors:
            return ValidationOutcome(errors=errors)
        try:
            payload = self.model_cls.model_validate(data)
        except pydantic.ValidationError as exc:
            return ValidationOutcome(errors=errors_from_pydantic(exc))
        return ValidationOutcome(payload=payload)
