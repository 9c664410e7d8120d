"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import unittest
import uuid
from datetime import datetime, timedelta, timezone

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User

BASE = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _user(email='john@test.com', created_at=BASE) -> User:
    return User.new(uuid.uuid4(), 'Doe', 'John', email, '00000000', created_at)


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── create_user + get_user (round-trip) ────────────────────

    def test_create_and_get_user(self):
        user = _user()
        self.repo.create_user(user)

        self.assertEqual(self.repo.get_user(str(user.id)), user)

    def test_get_user_raises_not_found_for_missing(self):
        with self.assertRaises(NotFoundError):
            self.repo.get_user(str(uuid.uuid4()))

    # ── unique keys ────────────────────────────────────────────

    def test_duplicate_id_rejected(self):
        user = _user()
        self.repo.create_user(user)

        with self.assertRaises(DuplicateError):
            self.repo.create_user(user)

    def test_duplicate_email_rejected(self):
        self.repo.create_user(_user())

        with self.assertRaises(DuplicateError):
            self.repo.create_user(_user())
        self.assertEqual(len(self.repo.store), 1)

    # ── get_users ─────────────────────────────────────────────

    def test_get_users_sorted_by_created_at(self):
        late = _user('late@test.com', BASE + timedelta(hours=1))
        early = _user('early@test.com', BASE)
        self.repo.create_user(late)
        self.repo.create_user(early)

        self.assertEqual(self.repo.get_users(), [early, late])

    def test_get_users_empty(self):
        self.assertEqual(self.repo.get_users(), [])


if __name__ == '__main__':
    unittest.main()
