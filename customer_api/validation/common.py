# customer_api/validation/common.py
"""
Limits and checks shared by both validation strategies.
"""

from typing import Any, Dict, List, Sequence, Union

from email_validator import EmailNotValidError, validate_email

CUSTOMER_NAME_MAX_LENGTH = 200
CUSTOMER_EMAIL_MAX_LENGTH = 200
INVOICE_NUMBER_MAX_LENGTH = 50
INVOICE_NUMBER_PREFIX = "INV"
PHONE_NUMBER_MAX_LENGTH = 50

ErrorMap = Dict[str, List[str]]


def is_blank(value: Any) -> bool:
    """True for missing-ish values: None, "" and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_valid_email(value: str) -> bool:
    # Syntax only; no DNS lookups.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """
    Render a location tuple as a field path.

    ("invoices", 0, "invoiceNumber") -> "invoices[0].invoiceNumber"
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def add_error(errors: ErrorMap, path: str, message: str) -> None:
    errors.setdefault(path, []).append(message)
