"""Helpdesk classifier — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.adapters.persistence.database import async_session_factory, engine
from helpdesk.adapters.persistence.repositories import SqlPatternRepository
from helpdesk.application.use_cases.manage_patterns import ManagePatternsUseCase
from helpdesk.config import settings
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.infrastructure.api.routes_analysis import router as analysis_router
from helpdesk.infrastructure.api.routes_analytics import router as analytics_router
from helpdesk.infrastructure.api.routes_cases import router as cases_router
from helpdesk.infrastructure.api.routes_health import router as health_router
from helpdesk.infrastructure.api.routes_messages import router as messages_router
from helpdesk.infrastructure.api.routes_patterns import router as patterns_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    app.state.catalog = DEFAULT_CATALOG
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
        async with async_session_factory() as session:
            app.state.catalog = await ManagePatternsUseCase(SqlPatternRepository(session)).load_catalog()
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    logger.info(
        "Pattern catalog: %s (%d rules), classifier: %s",
        app.state.catalog.source, len(app.state.catalog.rules),
        "model" if settings.llm_configured else "heuristics",
    )
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Helpdesk — support message classifier",
        description="Multilingual message classification, case grouping and channel escalation",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.catalog = DEFAULT_CATALOG

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(analysis_router, prefix="/api")
    app.include_router(messages_router, prefix="/api")
    app.include_router(cases_router, prefix="/api")
    app.include_router(patterns_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")

    return app


app = create_app()
