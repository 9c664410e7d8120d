"""Domain-level exceptions.

Services and adapters raise these errors to express business rule violations
and storage failures. The HTTP layer maps them to status codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from domain.model.user import User
    from domain.model.validation import FieldError


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates one or more field constraints.

    Carries every violation so clients can fix all fields at once.
    """

    def __init__(self, errors: Sequence[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors) or "Validation failed")


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class PersistenceError(DomainError):
    """Store-level failure: connectivity, constraint violation, transaction failure."""

    def __init__(self, message: str, user: User | None = None):
        super().__init__(message)
        # Entity built before the failed write, echoed back to the caller
        self.user = user


class DuplicateError(PersistenceError):
    """Entity with the same unique key already exists."""


class BindError(DomainError):
    """Incoming payload could not be decoded into the request shape."""
