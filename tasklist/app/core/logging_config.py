"""Process-wide logging: one stderr handler, store context appended per record.

Store calls log with ``extra={"op": ..., "todo_id": ...}``; the formatter
renders whatever of that context is present as a trailing ``[op=... todo=...]``
block and leaves plain records (uvicorn, startup) untouched.
"""

import logging
import os
from typing import Optional

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# LogRecord attribute -> label in the context block, in display order.
CONTEXT_FIELDS = (("op", "op"), ("todo_id", "todo"))


class StoreContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        parts = [
            f"{label}={record.__dict__[attr]}"
            for attr, label in CONTEXT_FIELDS
            if record.__dict__.get(attr) is not None
        ]
        if not parts:
            return line
        head, sep, tail = line.partition("\n")
        return f"{head} [{' '.join(parts)}]{sep}{tail}"


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(StoreContextFormatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved_level)

    # uvicorn runs with log_config=None, so its loggers flow into the root handler.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(resolved_level)

    _CONFIGURED = True
