"""Tests for MongoUserRepository against a mocked pymongo collection."""

import unittest
import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import bcrypt
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository, hash_password
from domain.model.errors import DuplicateError, NotFoundError, PersistenceError
from domain.model.user import User

NOW = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)
STORED_HASH = bcrypt.hashpw(b'00000000', bcrypt.gensalt(rounds=4)).decode('utf-8')


def _doc(user_id: str, email='john@test.com') -> dict:
    return {
        '_id': user_id,
        'lastname': 'Doe',
        'firstname': 'John',
        'email': email,
        'password_hash': STORED_HASH,
        'created_at': NOW,
    }


@patch('adapter.mongodb.user_repository.BCRYPT_ROUNDS', 4)
class TestMongoUserRepository(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(self.db)
        self.user = User.new(uuid.uuid4(), 'Doe', 'John', 'john@test.com', '00000000', NOW)

    def test_uses_users_collection(self):
        self.db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    # ── create_user ───────────────────────────────────────────

    def test_create_user_inserts_document_with_hashed_password(self):
        self.repo.create_user(self.user)

        self.collection.insert_one.assert_called_once()
        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['_id'], str(self.user.id))
        self.assertEqual(doc['email'], 'john@test.com')
        self.assertEqual(doc['created_at'], NOW)
        self.assertNotIn('password', doc)
        self.assertNotEqual(doc['password_hash'], '00000000')
        self.assertTrue(bcrypt.checkpw(b'00000000', doc['password_hash'].encode('utf-8')))
        self.assertIsNone(self.collection.insert_one.call_args.kwargs['session'])

    def test_create_user_duplicate_key(self):
        self.collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key error")

        with self.assertRaises(DuplicateError):
            self.repo.create_user(self.user)

    def test_create_user_store_failure(self):
        self.collection.insert_one.side_effect = PyMongoError("connection refused")

        with self.assertRaises(PersistenceError) as ctx:
            self.repo.create_user(self.user)
        self.assertNotIsInstance(ctx.exception, DuplicateError)

    def test_create_user_hashes_password_shaped_like_a_hash(self):
        user = User.new(uuid.uuid4(), 'Doe', 'John', 'john@test.com', STORED_HASH, NOW)

        self.repo.create_user(user)

        doc = self.collection.insert_one.call_args[0][0]
        self.assertNotEqual(doc['password_hash'], STORED_HASH)
        self.assertTrue(bcrypt.checkpw(STORED_HASH.encode('utf-8'), doc['password_hash'].encode('utf-8')))

    def test_create_user_keeps_stored_hash(self):
        self.collection.find_one.return_value = _doc(str(self.user.id))
        stored = self.repo.get_user(str(self.user.id))

        self.repo.create_user(stored)

        self.assertEqual(self.collection.insert_one.call_args[0][0]['password_hash'], STORED_HASH)

    def test_create_user_password_over_72_bytes(self):
        # 40 characters, 80 bytes in UTF-8
        user = User.new(uuid.uuid4(), 'Doe', 'John', 'john@test.com', '\u00e9' * 40, NOW)

        with self.assertRaises(PersistenceError) as ctx:
            self.repo.create_user(user)
        self.assertNotIsInstance(ctx.exception, DuplicateError)
        self.collection.insert_one.assert_not_called()

    # ── get_user ──────────────────────────────────────────────

    def test_get_user_success(self):
        user_id = str(uuid.uuid4())
        self.collection.find_one.return_value = _doc(user_id)

        user = self.repo.get_user(user_id)

        self.assertEqual(str(user.id), user_id)
        self.assertEqual(user.fullname, 'John Doe')
        self.assertEqual(user.email.value, 'john@test.com')
        self.assertEqual(user.password.value, STORED_HASH)
        self.assertTrue(user.password.hashed)
        self.collection.find_one.assert_called_once_with({'_id': user_id}, session=None)

    def test_get_user_not_found(self):
        self.collection.find_one.return_value = None

        with self.assertRaises(NotFoundError):
            self.repo.get_user(str(uuid.uuid4()))

    def test_get_user_store_failure(self):
        self.collection.find_one.side_effect = PyMongoError("timeout")

        with self.assertRaises(PersistenceError):
            self.repo.get_user(str(uuid.uuid4()))

    def test_get_user_corrupt_document(self):
        doc = _doc(str(uuid.uuid4()), email='broken')
        self.collection.find_one.return_value = doc

        with self.assertRaises(PersistenceError):
            self.repo.get_user(doc['_id'])

    # ── get_users ─────────────────────────────────────────────

    def test_get_users_sorted_by_created_at(self):
        ids = [str(uuid.uuid4()), str(uuid.uuid4())]
        cursor = MagicMock()
        cursor.sort.return_value = [_doc(ids[0], 'a@test.com'), _doc(ids[1], 'b@test.com')]
        self.collection.find.return_value = cursor

        users = self.repo.get_users()

        self.assertEqual([str(u.id) for u in users], ids)
        cursor.sort.assert_called_once_with('created_at', 1)

    def test_get_users_store_failure(self):
        self.collection.find.side_effect = PyMongoError("timeout")

        with self.assertRaises(PersistenceError):
            self.repo.get_users()

    # ── session / indexes ─────────────────────────────────────

    def test_session_is_passed_through(self):
        session = MagicMock()
        repo = MongoUserRepository(self.db, session=session)

        repo.create_user(self.user)

        self.assertIs(self.collection.insert_one.call_args.kwargs['session'], session)

    def test_ensure_indexes(self):
        self.assertTrue(self.repo.ensure_indexes())
        self.collection.create_index.assert_any_call([('email', 1)], name='idx_users_email', unique=True)

    def test_ensure_indexes_failure(self):
        self.collection.create_index.side_effect = PyMongoError("not authorized")
        self.assertFalse(self.repo.ensure_indexes())


class TestHashPassword(unittest.TestCase):

    def test_rejects_more_than_72_bytes(self):
        with self.assertRaises(ValueError):
            hash_password('x' * 73)

    @patch('adapter.mongodb.user_repository.BCRYPT_ROUNDS', 4)
    def test_raw_password_is_hashed(self):
        hashed = hash_password('00000000')
        self.assertTrue(hashed.startswith('$2b$'))
        self.assertTrue(bcrypt.checkpw(b'00000000', hashed.encode('utf-8')))


if __name__ == '__main__':
    unittest.main()
