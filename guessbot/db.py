from __future__ import annotations

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from .config import get_settings, require


_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        settings = get_settings()
        _client = AsyncIOMotorClient(require(settings.mongo_uri, "MONGO_URI"))
    return _client


def knowledge_collection() -> AsyncIOMotorCollection:
    settings = get_settings()
    return get_client()[settings.mongo_db]["knowledge"]


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
