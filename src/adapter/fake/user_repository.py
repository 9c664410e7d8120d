"""In-memory implementation of UserRepository for testing and local runs."""

import threading

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User


def find_conflict(store: dict[str, User], user: User) -> str | None:
    """Return a description of the unique key user would violate, if any."""
    if str(user.id) in store:
        return f"User {user.id} already exists"
    if any(u.email == user.email for u in store.values()):
        return "Email already registered"
    return None


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create_user(self, user: User) -> None:
        with self.lock:
            conflict = find_conflict(self.store, user)
            if conflict:
                raise DuplicateError(conflict)
            self.store[str(user.id)] = user

    # ── read operations ──────────────────────────────────────

    def get_user(self, user_id: str) -> User:
        with self.lock:
            user = self.store.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_users(self) -> list[User]:
        with self.lock:
            users = list(self.store.values())
        return sorted(users, key=lambda u: u.created_at)
