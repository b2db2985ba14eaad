import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from movies_api.core.config import settings

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None


async def get_client(ping: bool = False) -> AsyncIOMotorClient:
    """
    Lazy process-wide motor client with explicit pool and timeouts.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongo_dsn,
            appname="movies-api",
            tz_aware=True,  # date_added comes back timezone-aware
            maxPoolSize=50,
            minPoolSize=0,
            serverSelectionTimeoutMS=3000,
            connectTimeoutMS=3000,
            socketTimeoutMS=5000,
            retryWrites=True,
        )
    if ping:
        try:
            await _client.admin.command("ping")
        except Exception as e:
            # startup must not block on an unavailable store
            logger.warning("mongo_ping_failed", extra={"err": str(e)})
    return _client


async def get_mongo_db() -> AsyncIOMotorDatabase:
    client = await get_client()
    return client[settings.mongo_db]


async def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
