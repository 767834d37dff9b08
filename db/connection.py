from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from core.config import get_settings


@lru_cache
def get_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(get_settings().mongo_uri)


def get_db() -> AsyncIOMotorDatabase:
    return get_client()[get_settings().mongo_database]
