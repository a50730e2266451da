import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.adapters.redis_client import connect_redis
from tasklist.app.config import get_settings
from tasklist.app.core.logging_config import configure_logging
from tasklist.app.routers import ops, todos

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # A StoreUnavailableError here aborts startup, so the process exits.
    app.state.redis = await connect_redis(settings)
    logger.info("Environment: %s", settings.app_env)
    try:
        yield
    finally:
        logger.info("Shutting down, closing Redis connection")
        await app.state.redis.aclose()
        app.state.redis = None


def create_app() -> FastAPI:
    app = FastAPI(title="Task List", version="1.0.0", lifespan=lifespan)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(todos.pages_router)
    app.include_router(ops.router)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and known paths with the wrong method both read as missing pages.
        if exc.status_code in (404, 405):
            return PlainTextResponse("Page not found", status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Something went wrong!", status_code=500)

    return app


app = create_app()
