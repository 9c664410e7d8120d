"""User service — create and fetch use cases.

Pure business logic with no HTTP or storage dependencies. Validation
failures short-circuit before any persistence attempt; persistence errors
propagate verbatim to the caller.
"""

import logging

from domain.model.errors import PersistenceError, ValidationError
from domain.model.user import User
from port.unit_of_work import UnitOfWork
from port.user_repository import UserRepository
from port.user_requests import GetUserRequest, UserCreateRequest
from services.transaction_service import run_in_transaction

logger = logging.getLogger(__name__)


class UserService:
    """Orchestrates validation, entity construction and persistence.

    When a UnitOfWork is supplied, writes run inside a transaction;
    otherwise they go straight to the repository.
    """

    def __init__(self, users: UserRepository, uow: UnitOfWork | None = None):
        self.users = users
        self.uow = uow

    def create(self, req: UserCreateRequest) -> User:
        """Register a new user.

        Returns the created User domain object.

        Raises:
            ValidationError: request violates field constraints
            PersistenceError: store rejected the write; the built entity is
                attached as exc.user
        """
        errors = req.validate()
        if errors:
            logger.info("User creation rejected", extra={"fields": [e.field for e in errors]})
            raise ValidationError(errors)

        user = req.to_user_entity()

        try:
            if self.uow is not None:
                run_in_transaction(self.uow, lambda users: users.create_user(user))
            else:
                self.users.create_user(user)
        except PersistenceError as e:
            e.user = user
            raise

        logger.info("User created", extra={"userId": str(user.id)})
        return user

    def get_user(self, req: GetUserRequest) -> User:
        """Fetch a user by ID.

        Raises:
            ValidationError: ID is missing or not a UUID4
            NotFoundError: no user with that ID
            PersistenceError: store failure
        """
        errors = req.validate()
        if errors:
            raise ValidationError(errors)

        return self.users.get_user(req.id)

    def get_users(self) -> list[User]:
        return self.users.get_users()
