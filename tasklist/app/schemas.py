from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    redis: str
    timestamp: datetime
    error: Optional[str] = None


class MetricsResponse(BaseModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    completion_rate: float
    redis_memory: str
    redis_status: str


class MetricsError(BaseModel):
    error: str
    redis_status: str


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks, rounded to two decimals; 0 for an empty list."""
    if total <= 0:
        return 0
    return round(completed / total * 100, 2)
