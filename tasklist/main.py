"""Run the task list server with uvicorn.

uvicorn handles SIGINT/SIGTERM by draining requests and running the app
lifespan exit, which closes the shared Redis connection.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from tasklist.app.config import get_settings
from tasklist.app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve the task list web app.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger.info("Server running on port %s", args.port)
    logger.info("Redis: %s", settings.redis_target)

    uvicorn.run(
        "tasklist.app.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
