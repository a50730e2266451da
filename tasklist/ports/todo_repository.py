"""Port interface for todo persistence (repository boundary)."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from tasklist.app.models import Todo


@runtime_checkable
class ITodoRepository(Protocol):
    """Todo repository abstraction for create/get/list/update/delete operations."""

    async def next_id(self) -> int:
        """Allocate the next unique todo id."""

    async def create(self, text: str) -> Todo:
        """Persist a new todo and return the stored record."""

    async def get(self, todo_id: int) -> Optional[Todo]:
        """Return a todo by id or None when missing or unreadable."""

    async def list_all(self) -> list[Todo]:
        """Return all readable todos in display order."""

    async def update(self, todo_id: int, patch: dict[str, Any]) -> Optional[Todo]:
        """Overwrite the given fields; None when the todo does not exist."""

    async def delete(self, todo_id: int) -> bool:
        """Remove a todo; False only when the store call failed."""

    async def ping(self) -> None:
        """Raise when the store does not answer."""

    async def memory_usage(self) -> str:
        """Human-readable memory used by the store, or ``N/A``."""
