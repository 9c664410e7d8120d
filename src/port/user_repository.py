from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise domain errors instead of returning sentinels:
    NotFoundError for missing users, DuplicateError for unique key
    violations, PersistenceError for any other store failure.
    """
    def create_user(self, user: User) -> None:
        """Persist a new user keyed by its ID."""
        ...

    def get_user(self, user_id: str) -> User:
        """Find a user by ID. Raise NotFoundError if absent."""
        ...

    def get_users(self) -> list[User]:
        """Return all users, oldest first."""
        ...
