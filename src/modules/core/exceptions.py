"""Business error taxonomy shared by every module.

Raised by the Service Layer when a business rule is violated.  The API
boundary (``modules.core.exception_handler``) maps each error's ``kind``
to an HTTP status through a lookup table and renders a problem-details
body.  Anything that does not derive from ``BusinessError`` is treated
as an internal failure.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"


class BusinessError(Exception):
    """Base class for caller-recoverable failures.

    Subclasses set ``kind`` and ``code``; the message is human readable
    and safe to return to clients.
    """

    kind: ErrorKind
    code: str

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceNotFound(BusinessError):
    """The operation references an id with no matching record."""

    kind = ErrorKind.NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, resource: str, key: Any = None) -> None:
        if key is None:
            message = f"{resource} was not found."
        else:
            message = f"{resource} with id '{key}' was not found."
        super().__init__(message)
        self.resource = resource
        self.key = key


class ValidationFailed(BusinessError):
    """One or more fields failed a business rule.

    ``errors`` maps each offending field to every message it produced.
    """

    kind = ErrorKind.VALIDATION
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        errors: Mapping[str, List[str]],
        message: Optional[str] = None,
    ) -> None:
        self.errors: Dict[str, List[str]] = {
            field: list(messages) for field, messages in errors.items()
        }
        if message is None:
            if len(self.errors) == 1:
                field, messages = next(iter(self.errors.items()))
                message = f"Validation failed on field '{field}': {messages[0]}"
            else:
                message = "One or more validation errors occurred."
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationFailed:
        return cls({field: [message]})

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> ValidationFailed:
        """Translate a Pydantic parsing error into a field-keyed failure."""
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            loc = ".".join(str(part) for part in error["loc"]) or "non_field_errors"
            errors.setdefault(loc, []).append(error["msg"])
        return cls(errors)


class DuplicateResource(BusinessError):
    """Creation would violate a uniqueness constraint."""

    kind = ErrorKind.CONFLICT
    code = "DUPLICATE"

    def __init__(self, resource: str, field: str, value: Any) -> None:
        super().__init__(f"{resource} with {field} '{value}' already exists.")
        self.resource = resource
        self.field = field
        self.value = value
