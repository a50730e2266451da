"""Shared Redis client helper built from application settings."""

from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from tasklist.app.config import Settings
from tasklist.app.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def create_redis_client(settings: Settings) -> Redis:
    return Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password or None,
        decode_responses=True,
    )


async def connect_redis(settings: Settings) -> Redis:
    """Open the shared client and make sure Redis answers before serving."""
    client = create_redis_client(settings)
    try:
        await client.ping()
    except RedisError as exc:
        logger.error("Redis connection error (%s): %s", settings.redis_target, exc)
        await client.aclose()
        raise StoreUnavailableError(
            f"cannot reach Redis at {settings.redis_target}", cause=exc
        ) from exc
    logger.info("Redis connected: %s", settings.redis_target)
    return client
