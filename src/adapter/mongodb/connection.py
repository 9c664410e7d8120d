import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from utils.config import Settings

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'

# One client per connection string; MongoClient is thread-safe and pools connections
_client_cache: dict[str, MongoClient] = {}


def reset_client():
    for client in _client_cache.values():
        client.close()
    _client_cache.clear()


def get_mongodb_client(settings: Settings) -> MongoClient | None:
    """Get MongoDB client with connection caching and reconnection logic.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. If cached client fails, drop it and attempt a fresh connection

    Returns:
        MongoDB client or None if connection fails
    """
    if not settings.mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    cached = _client_cache.get(settings.mongo_url)
    if cached is not None:
        try:
            cached.admin.command('ping')
            return cached
        except PyMongoError:
            _client_cache.pop(settings.mongo_url, None)
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

    try:
        client = MongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            connectTimeoutMS=settings.mongo_timeout_ms,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,
        )
        client.admin.command('ping')  # Verify connection works
        _client_cache[settings.mongo_url] = client
        logger.info(f"[MONGODB] Connected successfully to {settings.mongo_database}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Connection failed: {str(e)[:200]}")
        return None
