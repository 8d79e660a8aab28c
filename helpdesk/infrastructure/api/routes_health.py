"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.database import get_session
from helpdesk.infrastructure.api.dependencies import get_catalog
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog
from helpdesk.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    catalog: PatternCatalog = Depends(get_catalog),
):
    """Check API and database connectivity."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "classifier": "model" if settings.llm_configured else "heuristics",
        "patterns": catalog.source,
        "service": "Helpdesk message classifier",
    }
