"""Dependency providers for the shared Redis client and the todo repository."""

from __future__ import annotations

from fastapi import Depends, Request
from redis.asyncio import Redis

from tasklist.adapters.todo_repository_redis import RedisTodoRepository
from tasklist.app.config import Settings, get_settings
from tasklist.ports.todo_repository import ITodoRepository


def get_redis(request: Request) -> Redis:
    """Return the process-wide client opened by the app lifespan."""
    client = getattr(request.app.state, "redis", None)
    if client is None:
        raise RuntimeError("Redis client not initialised (app lifespan did not run)")
    return client


def get_todo_repository(
    client: Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> ITodoRepository:
    return RedisTodoRepository.from_settings(client, settings)
