"""MongoDB implementation of UnitOfWork, backed by client sessions.

Multi-document transactions need a replica set or sharded cluster.
"""

from logging import getLogger

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoTransaction:
    def __init__(self, client: MongoClient, database_name: str):
        self.session = client.start_session()
        try:
            self.session.start_transaction()
        except PyMongoError:
            self.session.end_session()
            raise
        self.users = MongoUserRepository(client[database_name], session=self.session)

    def commit(self) -> None:
        try:
            self.session.commit_transaction()
        except PyMongoError as e:
            logger.error("Transaction commit failed", extra={"error": str(e)})
            raise PersistenceError("Failed to commit transaction") from e
        finally:
            self.session.end_session()

    def rollback(self) -> None:
        try:
            self.session.abort_transaction()
        except PyMongoError as e:
            logger.error("Transaction abort failed", extra={"error": str(e)})
            raise PersistenceError("Failed to roll back transaction") from e
        finally:
            self.session.end_session()


class MongoUnitOfWork:
    def __init__(self, client: MongoClient, database_name: str):
        self.client = client
        self.database_name = database_name

    def begin(self) -> MongoTransaction:
        try:
            return MongoTransaction(self.client, self.database_name)
        except PyMongoError as e:
            logger.error("Failed to start transaction", extra={"error": str(e)})
            raise PersistenceError("Failed to start transaction") from e
