# customer_api/domain/exceptions.py
"""
Error taxonomy for the customer API.

These exceptions describe what went wrong in domain terms. Turning them
into HTTP responses is the job of ``customer_api.api.errors``.
"""

from typing import Dict, List, Optional


class CustomerApiError(Exception):
    """Base exception for all customer API errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MalformedRequestError(CustomerApiError):
    """Raised when the request body is not JSON or deserializes to nothing."""


class ValidationError(CustomerApiError):
    """Raised when a payload fails structural validation."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors)) or "<payload>"
        super().__init__(
            message=f"Validation failed for: {fields}",
            details={"errors": errors},
        )


class NotFoundError(CustomerApiError):
    """
    Raised when a referenced entity does not exist.

    ``as_reference`` marks lookups made on behalf of another write (an
    invoice pointing at a missing customer); those are business-rule
    failures rather than a missing resource.
    """

    def __init__(self, entity: str, entity_id: object, as_reference: bool = False):
        self.entity = entity
        self.entity_id = entity_id
        self.as_reference = as_reference
        super().__init__(
            message=f"{entity} with id {entity_id} not found.",
            details={"entity": entity, "id": entity_id},
        )


class ConflictError(CustomerApiError):
    """Raised when a uniqueness rule (email, invoice number) would be broken."""

    def __init__(self, message: str, field: Optional[str] = None, value: object = None):
        self.field = field
        self.value = value
        super().__init__(message=message, details={"field": field, "value": value})

    @classmethod
    def duplicate_email(cls, email: str) -> "ConflictError":
        return cls(
            f"A customer with email '{email}' already exists.",
            field="email",
            value=email,
        )

    @classmethod
    def duplicate_invoice_number(cls, invoice_number: str) -> "ConflictError":
        return cls(
            f"An invoice with number '{invoice_number}' already exists.",
            field="invoiceNumber",
            value=invoice_number,
        )


class PersistenceError(CustomerApiError):
    """
    Raised when the store rejects or fails an operation.

    ``constraint_violation`` is true when the store refused the write
    because of one of its own constraints (unique index, foreign key,
    check), which callers treat like the matching pre-check failure.
    """

    def __init__(self, operation: str, reason: str, constraint_violation: bool = False):
        self.operation = operation
        self.reason = reason
        self.constraint_violation = constraint_violation
        super().__init__(
            message=f"Database {operation} failed: {reason}",
            details={"operation": operation, "constraint_violation": constraint_violation},
        )
