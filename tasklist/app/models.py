"""Todo record and its string encoding inside a Redis hash."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel

# Fields a caller may overwrite through an update patch.
PATCHABLE_FIELDS = ("task", "completed")


def utcnow() -> datetime:
    # Stored timestamps keep millisecond precision only.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Render a UTC timestamp as ``2024-05-01T10:00:00.000Z``."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def decode_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def encode_patch(patch: Mapping[str, Any]) -> dict[str, str]:
    """Encode a partial update into hash fields, rejecting unknown keys."""
    unknown = set(patch) - set(PATCHABLE_FIELDS)
    if unknown:
        raise ValueError(f"unsupported todo fields: {', '.join(sorted(unknown))}")
    encoded: dict[str, str] = {}
    if "task" in patch:
        encoded["task"] = str(patch["task"])
    if "completed" in patch:
        encoded["completed"] = encode_bool(bool(patch["completed"]))
    return encoded


class Todo(BaseModel):
    id: int
    task: str
    completed: bool = False
    created_at: datetime
    updated_at: datetime

    def to_hash(self) -> dict[str, str]:
        return {
            "id": str(self.id),
            "task": self.task,
            "completed": encode_bool(self.completed),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_hash(cls, data: Optional[Mapping[str, str]]) -> Optional["Todo"]:
        """Decode a stored hash; an empty hash or one without ``id`` is absent.

        A hash that has an ``id`` but a missing or malformed field raises
        ``KeyError`` or ``ValueError``.
        """
        if not data or not data.get("id"):
            return None
        return cls(
            id=int(data["id"]),
            task=data.get("task", ""),
            completed=decode_bool(data.get("completed")),
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
        )

    def patched(self, patch: Mapping[str, Any], updated_at: datetime) -> "Todo":
        """Return a copy with the patch fields and a new update timestamp."""
        changes: dict[str, Any] = {"updated_at": updated_at}
        if "task" in patch:
            changes["task"] = str(patch["task"])
        if "completed" in patch:
            changes["completed"] = bool(patch["completed"])
        return self.model_copy(update=changes)
