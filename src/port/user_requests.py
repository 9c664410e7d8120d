"""Inbound request shapes for the user use cases.

Each request declares its own field constraints and knows how to validate
itself. Requests convert into domain entities, never the other way round.
"""

from dataclasses import dataclass, field

from domain.model.user import User
from domain.model.validation import FieldError, rules, validate


@dataclass
class UserCreateRequest:
    """Payload for creating a user."""
    lastname: str = field(default='', metadata=rules('required'))
    firstname: str = field(default='', metadata=rules('required'))
    email: str = field(default='', metadata=rules('required', 'email'))
    password: str = field(default='', repr=False, metadata=rules('required', 'min=8', 'max=72'))

    def validate(self) -> list[FieldError]:
        return validate(self)

    def to_user_entity(self) -> User:
        """Build a new User with a fresh ID and the current timestamp."""
        return User.create(
            lastname=self.lastname,
            firstname=self.firstname,
            email=self.email,
            password=self.password,
        )


@dataclass
class GetUserRequest:
    """Lookup of a single user by ID."""
    id: str = field(default='', metadata=rules('required', 'uuid4'))

    def validate(self) -> list[FieldError]:
        return validate(self)
