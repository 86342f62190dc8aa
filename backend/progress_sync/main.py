"""Progress Sync API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ProgressSyncError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Sync store and SyncService built once on startup via lifespan, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Unconfigured backend is not a boot failure: the service answers 503 instead
    - Expired SQL rows purged at boot; a purge failure is logged, never fatal
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from progress_sync.api.error_handlers import register_error_handlers
from progress_sync.api.routes import health
from progress_sync.api.routes import progress_sync as progress_sync_routes
from progress_sync.config import Settings, get_settings
from progress_sync.core.errors import SyncStoreError
from progress_sync.infrastructure.observability import setup_logging
from progress_sync.infrastructure.sql_store import SqlSyncStore
from progress_sync.infrastructure.sync_store import init_sync_store
from progress_sync.services.sync_service import SyncService

logger = logging.getLogger(__name__)


async def _prepare_sql_store(store: SqlSyncStore, settings: Settings) -> None:
    try:
        if settings.auto_create_schema:
            await store.create_schema()
        await store.purge_expired()
    except SyncStoreError as e:
        logger.error(f"Sync store preparation failed: {e.message}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = init_sync_store(settings)
    if isinstance(store, SqlSyncStore):
        await _prepare_sql_store(store, settings)
    app.state.sync_service = SyncService(
        store,
        ttl_seconds=settings.progress_sync_ttl_seconds,
        max_snapshot_bytes=settings.progress_sync_max_snapshot_bytes,
    )
    logger.info("Progress Sync API started")
    yield
    if store is not None:
        await store.close()
    logger.info("Progress Sync API shutting down")


app = FastAPI(
    title="Progress Sync API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(progress_sync_routes.router)

register_error_handlers(app)
