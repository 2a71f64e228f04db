"""Shopping List API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers keep the uuApp envelope on every failure path
    - CORS configured from settings (not hardcoded)
    - Record store (memory or sql) initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shoplist.api.error_handlers import register_error_handlers
from shoplist.api.routes import health, shopping_list
from shoplist.config import StoreBackend, get_settings
from shoplist.infrastructure.database import close_db, init_db
from shoplist.infrastructure.memory_store import close_memory_store, init_memory_store
from shoplist.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.store_backend == StoreBackend.MEMORY:
        init_memory_store(settings.awid, seed_examples=settings.memory_seed_examples)
    else:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await manager.create_schema()
    logger.info(f"Shopping List API started ({settings.store_backend.value} store)")
    yield
    logger.info("Shopping List API shutting down")
    close_memory_store()
    await close_db()


app = FastAPI(
    title="Shopping List API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(shopping_list.router)

register_error_handlers(app)
