"""Wiring: build adapters, service and controller from the startup Settings."""

from functools import lru_cache

from fastapi import Depends, HTTPException
from pymongo import MongoClient

from adapter.controller.user_controller import UserController
from adapter.fake.unit_of_work import FakeUnitOfWork
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.unit_of_work import MongoUnitOfWork
from adapter.mongodb.user_repository import MongoUserRepository
from port.unit_of_work import UnitOfWork
from port.user_repository import UserRepository
from port.user_service import UserServicePort
from services.user_service import UserService
from utils.config import Settings


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment (after load_dotenv)."""
    return Settings.from_env()


@lru_cache
def _get_memory_unit_of_work() -> FakeUnitOfWork:
    """Process-wide in-memory store for STORAGE_BACKEND=memory."""
    return FakeUnitOfWork()


def _get_client(settings: Settings) -> MongoClient:
    """Get MongoDB client, raising 503 if unavailable."""
    client = get_mongodb_client(settings)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    if settings.storage_backend == 'mongodb':
        return MongoUserRepository(_get_client(settings)[settings.mongo_database])
    return _get_memory_unit_of_work().repo


def get_unit_of_work(settings: Settings = Depends(get_settings)) -> UnitOfWork | None:
    if not settings.use_transactions:
        return None
    if settings.storage_backend == 'mongodb':
        return MongoUnitOfWork(_get_client(settings), settings.mongo_database)
    return _get_memory_unit_of_work()


def get_user_service(
    users: UserRepository = Depends(get_user_repo),
    uow: UnitOfWork | None = Depends(get_unit_of_work),
) -> UserServicePort:
    return UserService(users, uow)


def get_user_controller(service: UserServicePort = Depends(get_user_service)) -> UserController:
    return UserController(service)
