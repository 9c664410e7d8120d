"""In-memory implementation of UnitOfWork.

Writes are staged on a snapshot of the parent store and merged on commit,
so nothing is visible to other callers until the transaction commits.
"""

from adapter.fake.user_repository import FakeUserRepository, find_conflict
from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import User


class _StagedUserRepository(FakeUserRepository):
    """UserRepository view bound to one open FakeTransaction."""

    def __init__(self, tx: 'FakeTransaction', snapshot: dict[str, User]):
        super().__init__()
        self._tx = tx
        self.store = snapshot

    def create_user(self, user: User) -> None:
        self._tx.ensure_open()
        super().create_user(user)

    def get_user(self, user_id: str) -> User:
        self._tx.ensure_open()
        return super().get_user(user_id)

    def get_users(self) -> list[User]:
        self._tx.ensure_open()
        return super().get_users()


class FakeTransaction:
    def __init__(self, uow: 'FakeUnitOfWork'):
        self._uow = uow
        self.closed = False
        with uow.repo.lock:
            snapshot = dict(uow.repo.store)
        self._base_keys = set(snapshot)
        self.users = _StagedUserRepository(self, snapshot)

    def ensure_open(self) -> None:
        if self.closed:
            raise PersistenceError("Transaction is already closed")

    def commit(self) -> None:
        self.ensure_open()
        self.closed = True

        staged = [u for key, u in self.users.store.items() if key not in self._base_keys]
        parent = self._uow.repo
        with parent.lock:
            merged = dict(parent.store)
            for user in staged:
                conflict = find_conflict(merged, user)
                if conflict:
                    raise DuplicateError(conflict)
                merged[str(user.id)] = user
            parent.store.update(merged)
        self._uow.commits += 1

    def rollback(self) -> None:
        self.ensure_open()
        self.closed = True
        self._uow.rollbacks += 1
        self.users.store = {}


class FakeUnitOfWork:
    def __init__(self, repo: FakeUserRepository | None = None):
        self.repo = repo if repo is not None else FakeUserRepository()
        self.commits = 0
        self.rollbacks = 0

    def begin(self) -> FakeTransaction:
        return FakeTransaction(self)
