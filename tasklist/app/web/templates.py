from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi.templating import Jinja2Templates

from tasklist.app.config import get_settings

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

STORE_NOT_READY = "Redis connection not ready. Please wait..."

# Banner text for the ``?error=`` marker set by redirects.
ERROR_MESSAGES = {
    "empty": "Task text cannot be empty.",
    "add": "Failed to add the task.",
    "delete": "Failed to delete the task.",
    "toggle": "Failed to update the task status.",
    "update": "Failed to update the task.",
}


def error_message(code: str | None) -> str | None:
    if not code:
        return None
    return ERROR_MESSAGES.get(code, "Something went wrong.")


def format_datetime(value) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M")


@lru_cache()
def get_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    settings = get_settings()
    templates.env.filters["datetime"] = format_datetime
    templates.env.globals["app_env"] = settings.app_env
    return templates
