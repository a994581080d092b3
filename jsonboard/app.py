import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from jsonboard.core.config import Settings, get_settings
from jsonboard.core.errors import register_exception_handlers
from jsonboard.core.logging_config import setup_logging
from jsonboard.repositories.json_storage import JsonStore
from jsonboard.routers import comments as comments_router
from jsonboard.routers import posts as posts_router
from jsonboard.services.collection_service import CollectionService

logger = logging.getLogger(__name__)

COLLECTION_ROUTERS = (posts_router, comments_router)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def _lifespan_factory(store: JsonStore, create_if_missing: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_if_missing:
            store.ensure_exists()
        logger.info("Serving %s from %s", ", ".join(app.state.collections), store.path)
        yield

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (`--factory`) and tests."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    store = JsonStore(settings.db_file)
    app = FastAPI(
        title="jsonboard",
        lifespan=_lifespan_factory(store, settings.create_db_if_missing),
    )
    app.state.settings = settings
    app.state.store = store
    app.state.collections = {
        module.COLLECTION: CollectionService(store, module.COLLECTION, module.LABEL)
        for module in COLLECTION_ROUTERS
    }

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLogMiddleware)
    register_exception_handlers(app)

    for module in COLLECTION_ROUTERS:
        app.include_router(module.router)

    # mounted last so API routes win over files with the same path
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    return app


app = create_app()
