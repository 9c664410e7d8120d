# domain/model/user.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from domain.model.errors import ValidationError
from domain.model.validation import FieldError, rules, validate


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class Email:
    """Email address value object. Construction never fails; call validate()."""
    value: str = field(metadata=rules('email'))

    def __str__(self) -> str:
        return self.value

    def validate(self) -> list[FieldError]:
        return validate(self)


@dataclass(frozen=True)
class Password:
    """Password value object.

    hashed is True when value is a stored credential hash rather than the
    secret the user typed.
    """
    value: str = field(metadata=rules('min=8'))
    hashed: bool = False

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return "Password('********')"

    def validate(self) -> list[FieldError]:
        return validate(self)


# ── User Domain Model ────────────────────────────────────


@dataclass(frozen=True)
class User:
    """Domain model representing a user. Immutable once built."""
    id: uuid.UUID
    lastname: str
    firstname: str
    email: Email
    password: Password
    created_at: datetime

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def new(
        id: uuid.UUID,
        lastname: str,
        firstname: str,
        email: str,
        password: str,
        created_at: datetime,
    ) -> 'User':
        """Build a User, wrapping raw email/password into value objects.

        Raises:
            ValidationError: email or password does not satisfy its constraint
        """
        email_vo = Email(email)
        password_vo = Password(password)

        errors = validate(email_vo, prefix='email.') + validate(password_vo, prefix='password.')
        if errors:
            raise ValidationError(errors)

        return User(
            id=id,
            lastname=lastname,
            firstname=firstname,
            email=email_vo,
            password=password_vo,
            created_at=created_at,
        )

    @staticmethod
    def create(lastname: str, firstname: str, email: str, password: str) -> 'User':
        """Create a brand-new User with a generated ID and the current time."""
        return User.new(
            id=uuid.uuid4(),
            lastname=lastname,
            firstname=firstname,
            email=email,
            password=password,
            created_at=datetime.now(timezone.utc),
        )

    # ── queries ───────────────────────────────────────────

    @property
    def fullname(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()
