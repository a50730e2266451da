"""HTML routes for the todo list: render, add, toggle, edit, delete."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from redis.exceptions import RedisError

from tasklist.app.core.errors import TodoStoreError
from tasklist.app.deps import get_todo_repository
from tasklist.app.web.templates import STORE_NOT_READY, error_message, get_templates
from tasklist.ports.todo_repository import ITodoRepository

logger = logging.getLogger(__name__)

pages_router = APIRouter(tags=["todos"])
templates = get_templates()


def _redirect_home(error: Optional[str] = None) -> RedirectResponse:
    url = f"/?error={error}" if error else "/"
    return RedirectResponse(url=url, status_code=303)


def _clean_text(text: Optional[str]) -> str:
    return (text or "").strip()


def _parse_id(raw: str) -> Optional[int]:
    """Path ids are ASCII digit strings; anything else names no todo."""
    return int(raw) if raw.isascii() and raw.isdigit() else None


@pages_router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    error: Optional[str] = Query(None),
    repo: ITodoRepository = Depends(get_todo_repository),
):
    banner = error_message(error)
    try:
        await repo.ping()
    except RedisError as exc:
        logger.warning("store not ready: %s", exc, extra={"op": "list"})
        return templates.TemplateResponse(
            request,
            "index.html",
            {"todos": [], "error": STORE_NOT_READY},
        )
    try:
        todos = await repo.list_all()
    except Exception:
        logger.exception("Error fetching todos", extra={"op": "list"})
        todos, banner = [], "Failed to load tasks"
    return templates.TemplateResponse(
        request,
        "index.html",
        {"todos": todos, "error": banner},
    )


@pages_router.post("/add")
async def add_todo(
    task: Optional[str] = Form(None),
    repo: ITodoRepository = Depends(get_todo_repository),
):
    text = _clean_text(task)
    if not text:
        return _redirect_home("empty")
    try:
        await repo.create(text)
    except TodoStoreError:
        logger.exception("Error adding todo", extra={"op": "add"})
        return _redirect_home("add")
    return _redirect_home()


@pages_router.post("/delete/{todo_id}")
async def delete_todo(
    todo_id: str,
    repo: ITodoRepository = Depends(get_todo_repository),
):
    parsed = _parse_id(todo_id)
    if parsed is None:
        return _redirect_home()
    if not await repo.delete(parsed):
        return _redirect_home("delete")
    return _redirect_home()


@pages_router.post("/toggle/{todo_id}")
async def toggle_todo(
    todo_id: str,
    repo: ITodoRepository = Depends(get_todo_repository),
):
    parsed = _parse_id(todo_id)
    if parsed is None:
        return _redirect_home()
    todo = await repo.get(parsed)
    if todo is None:
        return _redirect_home()
    try:
        await repo.update(parsed, {"completed": not todo.completed})
    except TodoStoreError:
        logger.exception("Error toggling todo", extra={"op": "toggle", "todo_id": parsed})
        return _redirect_home("toggle")
    return _redirect_home()


@pages_router.post("/edit/{todo_id}")
async def edit_todo(
    todo_id: str,
    task: Optional[str] = Form(None),
    repo: ITodoRepository = Depends(get_todo_repository),
):
    text = _clean_text(task)
    if not text:
        return _redirect_home("empty")
    parsed = _parse_id(todo_id)
    if parsed is None:
        return _redirect_home()
    try:
        await repo.update(parsed, {"task": text})
    except TodoStoreError:
        logger.exception("Error updating todo", extra={"op": "edit", "todo_id": parsed})
        return _redirect_home("update")
    return _redirect_home()
