"""Customer API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CustomerApiError → structured JSON responses
    - Store and Cache handles live on app.state; injected handles are never replaced
    - Handles created by the lifespan are closed by the lifespan

Design Decisions:
    - create_app(settings, store, cache): tests and embedders pass collaborators in;
      the module-level `app` exists only as the ASGI entry point for uvicorn
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_api.api.error_handlers import register_error_handlers
from customer_api.api.routes import cache as cache_routes, customers, health
from customer_api.config import Settings, get_settings
from customer_api.core.repository_protocols import Cache, Store
from customer_api.infrastructure.cache import RedisCache
from customer_api.infrastructure.database import DatabaseManager
from customer_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    db_manager: DatabaseManager | None = None
    redis_cache: RedisCache | None = None
    if app.state.store is None:
        db_manager = DatabaseManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await db_manager.create_schema()
        app.state.store = db_manager.store
    if app.state.cache is None:
        redis_cache = RedisCache.from_url(settings.redis_url)
        app.state.cache = redis_cache

    logger.info(f"Customer API started on port {settings.http_port}")
    yield
    logger.info("Customer API shutting down")

    if redis_cache is not None:
        await redis_cache.close()
        app.state.cache = None
    if db_manager is not None:
        await db_manager.dispose()
        app.state.store = None


def create_app(
    settings: Settings | None = None,
    store: Store | None = None,
    cache: Cache | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Customer API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.cache = cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(cache_routes.router)
    app.include_router(customers.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Serve the ASGI app on HTTP_HOST:HTTP_PORT."""
    settings = get_settings()
    uvicorn.run(
        "customer_api.main:app",
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
    )
