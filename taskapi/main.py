import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from taskapi.core.config import get_settings
from taskapi.core.exceptions import StoreError, register_exception_handlers
from taskapi.routers.resources import ALL_ROUTERS
from taskapi.store.protocol import KeyValueStore
from taskapi.store.redis_store import RedisKeyValueStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = RedisKeyValueStore.from_settings(settings)
        try:
            await app.state.store.ping()
            logger.info("Redis connection established")
        except StoreError:
            # Requests fail with 500 until Redis is reachable
            logger.error("Redis unreachable at startup")

    yield

    if owns_store:
        await app.state.store.close()


def create_app(store: Optional[KeyValueStore] = None) -> FastAPI:
    """Build the API. A store passed in is used as-is and not closed on shutdown."""
    settings = get_settings()
    app = FastAPI(
        title="Task Management API",
        description="CRUD API for users, tasks, priorities and tags stored in Redis",
        swagger_ui_parameters={"displayRequestDuration": True},
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store
    register_exception_handlers(app)

    # Include routers
    for router in ALL_ROUTERS:
        app.include_router(router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Task Management API",
            "docs": "/docs",
            "version": "1.0.0",
        }

    @app.get("/health")
    async def health_check():
        try:
            await app.state.store.ping()
        except StoreError:
            return {"status": "degraded", "redis": "unreachable"}
        return {"status": "healthy", "redis": "ok"}

    return app


app = create_app()
