"""JSON probes: store health and aggregate task metrics."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from tasklist.app.deps import get_todo_repository
from tasklist.app.models import format_timestamp, utcnow
from tasklist.app.schemas import (
    HealthResponse,
    MetricsError,
    MetricsResponse,
    completion_rate,
)
from tasklist.ports.todo_repository import ITodoRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ops"])


@router.get("/health", response_model=HealthResponse)
async def health(repo: ITodoRepository = Depends(get_todo_repository)):
    try:
        await repo.ping()
    except RedisError as exc:
        logger.warning("health probe failed: %s", exc, extra={"op": "health"})
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "redis": "disconnected",
                "error": str(exc),
                "timestamp": format_timestamp(utcnow()),
            },
        )
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "redis": "connected",
            "timestamp": format_timestamp(utcnow()),
        },
    )


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    responses={500: {"model": MetricsError}},
)
async def metrics(repo: ITodoRepository = Depends(get_todo_repository)):
    try:
        todos = await repo.list_all()
        memory = await repo.memory_usage()
    except RedisError as exc:
        logger.error("metrics failed: %s", exc, extra={"op": "metrics"})
        return JSONResponse(
            status_code=500,
            content=MetricsError(error="Failed to fetch metrics", redis_status="error").model_dump(),
        )

    total = len(todos)
    completed = sum(1 for todo in todos if todo.completed)
    return MetricsResponse(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        completion_rate=completion_rate(completed, total),
        redis_memory=memory,
        redis_status="connected",
    )
