"""CTR Engine — FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ctr_engine.application.use_cases.counters import CountersProcessor
from ctr_engine.infrastructure.api.errors import register_error_handlers
from ctr_engine.infrastructure.api.routes_counters import router as counters_router
from ctr_engine.infrastructure.api.routes_health import router as health_router
from ctr_engine.infrastructure.api.routes_sampling import router as sampling_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the processor from settings unless one was injected."""
    if getattr(app.state, "processor", None) is not None:
        yield
        return

    from ctr_engine.adapters.persistence.database import async_session_factory, engine
    from ctr_engine.config import settings
    from ctr_engine.infrastructure.api.dependencies import build_processor

    app.state.processor = build_processor(settings, async_session_factory)
    logger.info("Counter store ready")
    try:
        yield
    finally:
        await engine.dispose()


def create_app(processor: CountersProcessor | None = None) -> FastAPI:
    app = FastAPI(
        title="CTR Engine",
        description="View/click counters with Thompson sampling over Beta posteriors",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.processor = processor

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(counters_router)
    app.include_router(sampling_router)

    return app
