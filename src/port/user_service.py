"""Port definition for the user use cases, consumed by controllers."""

from typing import Protocol

from domain.model.user import User
from port.user_requests import GetUserRequest, UserCreateRequest


class UserServicePort(Protocol):
    def create(self, req: UserCreateRequest) -> User:
        """Validate, build and persist a new user.

        Raises:
            ValidationError: request violates field constraints (nothing persisted)
            PersistenceError: store rejected the write (exc.user holds the entity)
        """
        ...

    def get_user(self, req: GetUserRequest) -> User:
        """Raises ValidationError, NotFoundError or PersistenceError."""
        ...

    def get_users(self) -> list[User]: ...
