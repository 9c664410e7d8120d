"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import replace
from logging import getLogger

import bcrypt
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, NotFoundError, PersistenceError, ValidationError
from domain.model.user import Password, User

logger = getLogger(__name__)

# bcrypt configuration
# Using 12 rounds (2^12 = 4096 iterations) for secure password hashing
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash password with bcrypt.

    Raises:
        ValueError: password is longer than BCRYPT_MAX_BYTES once UTF-8 encoded
    """
    encoded = password.encode('utf-8')
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode('utf-8')


class MongoUserRepository:
    def __init__(self, db: Database, session: ClientSession | None = None):
        self.collection = db[USERS_COLLECTION_NAME]
        self.session = session

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            self.collection.create_index([('email', 1)], name='idx_users_email', unique=True)
            self.collection.create_index([('created_at', 1)], name='idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_document(self, user: User) -> dict:
        """Convert User domain model to MongoDB document. Never stores the raw password."""
        if user.password.hashed:
            password_hash = user.password.value
        else:
            password_hash = hash_password(user.password.value)
        return {
            '_id': str(user.id),
            'lastname': user.lastname,
            'firstname': user.firstname,
            'email': user.email.value,
            'password_hash': password_hash,
            'created_at': user.created_at,
        }

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        try:
            user = User.new(
                id=uuid.UUID(doc['_id']),
                lastname=doc.get('lastname', ''),
                firstname=doc.get('firstname', ''),
                email=doc['email'],
                password=doc['password_hash'],
                created_at=doc['created_at'],
            )
        except (KeyError, ValueError, ValidationError) as e:
            logger.error("Corrupt user document", extra={"userId": doc.get('_id'), "error": str(e)})
            raise PersistenceError(f"Corrupt user document {doc.get('_id')}") from e
        return replace(user, password=Password(doc['password_hash'], hashed=True))

    def create_user(self, user: User) -> None:
        """Insert a new user document keyed by the user's ID."""
        user_id = str(user.id)
        try:
            doc = self._to_document(user)
        except ValueError as e:
            logger.warning("User creation failed: unhashable password", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to hash password") from e

        try:
            self.collection.insert_one(doc, session=self.session)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"userId": user_id})
            raise DuplicateError("User with this ID or email already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to create user") from e

        logger.info("User stored", extra={"userId": user_id})

    def get_user(self, user_id: str) -> User:
        """Find a user by ID. Raise NotFoundError if absent."""
        try:
            doc = self.collection.find_one({'_id': user_id}, session=self.session)
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to get user") from e

        if doc is None:
            raise NotFoundError(f"User {user_id} not found")
        return self._to_domain(doc)

    def get_users(self) -> list[User]:
        """Return all users, oldest first."""
        try:
            docs = list(self.collection.find({}, session=self.session).sort('created_at', 1))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise PersistenceError("Failed to list users") from e

        return [self._to_domain(doc) for doc in docs]
