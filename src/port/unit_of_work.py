"""Port definition for transactional units of work.

A Transaction exposes a UserRepository bound to the open transaction, so
work scheduled through services.transaction_service.run_in_transaction can
only touch the store through that scoped view.
"""

from typing import Protocol

from port.user_repository import UserRepository


class Transaction(Protocol):
    users: UserRepository

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class UnitOfWork(Protocol):
    def begin(self) -> Transaction:
        """Open a new transaction. Raise PersistenceError if the store refuses."""
        ...
