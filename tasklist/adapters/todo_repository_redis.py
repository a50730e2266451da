"""Redis-backed todo repository.

Layout: one hash per todo (``<prefix><id>``), a list of ids in display order
and an INCR counter that hands out ids. Reads degrade to empty/absent when
Redis misbehaves; create and update surface a ``TodoStoreError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from tasklist.app.config import Settings
from tasklist.app.core.errors import TodoStoreError
from tasklist.app.models import Todo, encode_patch, format_timestamp, utcnow
from tasklist.ports.todo_repository import ITodoRepository

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "todo:"
DEFAULT_LIST_KEY = "todos:list"
DEFAULT_COUNTER_KEY = "todos:counter"


def _decode(data: dict[str, str], todo_id: Any, *, op: str) -> Optional[Todo]:
    """Decode a stored hash, treating missing or unreadable records as absent."""
    try:
        todo = Todo.from_hash(data)
    except (KeyError, ValueError) as exc:
        logger.warning(
            "unreadable todo hash, skipping: %r", exc, extra={"op": op, "todo_id": todo_id}
        )
        return None
    if todo is None and op == "list":
        logger.warning("listed id has no hash, skipping", extra={"op": op, "todo_id": todo_id})
    return todo


class RedisTodoRepository(ITodoRepository):
    """Todo repository persisted in Redis hashes, a list and a counter."""

    def __init__(
        self,
        client: Redis,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        list_key: str = DEFAULT_LIST_KEY,
        counter_key: str = DEFAULT_COUNTER_KEY,
        atomic_writes: bool = False,
    ) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._list_key = list_key
        self._counter_key = counter_key
        self._atomic_writes = atomic_writes

    @classmethod
    def from_settings(cls, client: Redis, settings: Settings) -> "RedisTodoRepository":
        return cls(
            client,
            key_prefix=settings.todo_key_prefix,
            list_key=settings.todo_list_key,
            counter_key=settings.todo_counter_key,
            atomic_writes=settings.atomic_writes,
        )

    def _todo_key(self, todo_id: Any) -> str:
        return f"{self._key_prefix}{todo_id}"

    async def next_id(self) -> int:
        return int(await self._client.incr(self._counter_key))

    async def create(self, text: str) -> Todo:
        try:
            todo_id = await self.next_id()
            now = utcnow()
            todo = Todo(id=todo_id, task=text, completed=False, created_at=now, updated_at=now)
            mapping = todo.to_hash()
            if self._atomic_writes:
                async with self._client.pipeline(transaction=True) as pipe:
                    pipe.hset(self._todo_key(todo_id), mapping=mapping)
                    pipe.rpush(self._list_key, str(todo_id))
                    await pipe.execute()
            else:
                # Two separate writes: a failure after HSET leaves an orphan
                # hash that never shows up in list_all().
                await self._client.hset(self._todo_key(todo_id), mapping=mapping)
                await self._client.rpush(self._list_key, str(todo_id))
        except RedisError as exc:
            logger.error("create failed: %s", exc, extra={"op": "create"})
            raise TodoStoreError("failed to create todo", cause=exc) from exc
        logger.info("created todo", extra={"op": "create", "todo_id": todo_id})
        return todo

    async def get(self, todo_id: int) -> Optional[Todo]:
        try:
            data = await self._client.hgetall(self._todo_key(todo_id))
        except RedisError as exc:
            logger.error("get failed: %s", exc, extra={"op": "get", "todo_id": todo_id})
            return None
        return _decode(data, todo_id, op="get")

    async def list_all(self) -> list[Todo]:
        try:
            ids = await self._client.lrange(self._list_key, 0, -1)
            todos: list[Todo] = []
            for todo_id in ids:
                data = await self._client.hgetall(self._todo_key(todo_id))
                todo = _decode(data, todo_id, op="list")
                if todo is None:
                    continue
                todos.append(todo)
        except RedisError as exc:
            logger.error("list failed: %s", exc, extra={"op": "list"})
            return []
        return todos

    async def update(self, todo_id: int, patch: dict[str, Any]) -> Optional[Todo]:
        encoded = encode_patch(patch)
        current = await self.get(todo_id)
        if current is None:
            return None
        now = utcnow()
        encoded["updatedAt"] = format_timestamp(now)
        try:
            await self._client.hset(self._todo_key(todo_id), mapping=encoded)
        except RedisError as exc:
            logger.error("update failed: %s", exc, extra={"op": "update", "todo_id": todo_id})
            raise TodoStoreError(f"failed to update todo {todo_id}", cause=exc) from exc
        return current.patched(patch, now)

    async def delete(self, todo_id: int) -> bool:
        try:
            if self._atomic_writes:
                async with self._client.pipeline(transaction=True) as pipe:
                    pipe.delete(self._todo_key(todo_id))
                    pipe.lrem(self._list_key, 0, str(todo_id))
                    await pipe.execute()
            else:
                await self._client.delete(self._todo_key(todo_id))
                await self._client.lrem(self._list_key, 0, str(todo_id))
        except RedisError as exc:
            logger.error("delete failed: %s", exc, extra={"op": "delete", "todo_id": todo_id})
            return False
        return True

    async def ping(self) -> None:
        await self._client.ping()

    async def memory_usage(self) -> str:
        info = await self._client.info("memory")
        value = info.get("used_memory_human") if info else None
        return str(value).strip() if value else "N/A"
