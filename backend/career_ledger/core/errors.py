"""Domain error classes.

Every failure raised by the lifecycle model, the repositories and the
services derives from CareerLedgerError. Each error carries a
machine-readable code, a human-readable message and the HTTP status an
outer API layer should translate it into.

WHY CUSTOM ERROR CLASSES:
- Callers can catch one base class or a precise failure kind
- Offending field and value travel with the error instead of the message
- Mapping to response bodies stays a mechanical lookup
"""

import uuid
from typing import Any


class CareerLedgerError(Exception):
    """Base class for Career Ledger errors.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code an API layer should return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class InvalidArgumentError(CareerLedgerError):
    """A field failed a validation rule (400).

    Raised synchronously by entity factories and mutators when a value is
    blank, too long, malformed, or out of range.

    Attributes:
        field: Name of the offending argument.
        value: The rejected value.
    """

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        *,
        code: str = "INVALID_ARGUMENT",
        status_code: int = 400,
        details: list[dict] | None = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(
            code=code,
            message=message,
            status_code=status_code,
            details=details or [{"field": field, "message": message}],
        )


class OwnershipMismatchError(InvalidArgumentError):
    """An event does not belong to the aggregate it is appended to (422).

    A kind of InvalidArgumentError: the rejected argument is the event,
    so callers catching InvalidArgumentError handle it too.

    Attributes:
        field: "application_id" or "account_id".
        expected: Id carried by the aggregate.
        actual: Id carried by the event.
    """

    def __init__(self, field: str, expected: uuid.UUID, actual: uuid.UUID) -> None:
        self.expected = expected
        self.actual = actual
        if field == "application_id":
            message = "Event does not belong to this application"
        else:
            message = "Event does not belong to the same account"
        super().__init__(
            field,
            message,
            actual,
            code="OWNERSHIP_MISMATCH",
            status_code=422,
            details=[
                {"field": field, "expected": str(expected), "actual": str(actual)}
            ],
        )


class ImmutableEventError(CareerLedgerError):
    """Attempted to modify an application event after creation (422).

    Events form an append-only audit log; no field changes post-creation.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            code="IMMUTABLE_EVENT",
            message=f"Application events are immutable; cannot modify '{field}'",
            status_code=422,
        )


class NotFoundError(CareerLedgerError):
    """Resource not found (404).

    Use when requested resource doesn't exist OR doesn't belong to the account.

    WHY NOT A SEPARATE ERROR FOR WRONG OWNERSHIP:
    - Revealing "exists but not yours" leaks information
    - From the caller's perspective, the resource simply doesn't exist
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class ConflictError(CareerLedgerError):
    """Duplicate or conflicting resource (409).

    Accepts a custom code for specific conflict types.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details,
        )
