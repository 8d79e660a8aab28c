"""Pattern endpoints — inspect the active catalog, edit overrides."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.database import get_session
from helpdesk.application.use_cases.manage_patterns import ManagePatternsUseCase
from helpdesk.domain.value_objects.pattern_catalog import ANY_LANGUAGE, PatternCatalog, PatternRule
from helpdesk.infrastructure.api.dependencies import get_catalog, get_manage_patterns_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patterns", tags=["patterns"])


class PatternIn(BaseModel):
    group: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    patterns: list[str] = Field(default_factory=list)
    language: str = ANY_LANGUAGE
    urgency: int | None = Field(default=None, ge=0, le=5)
    auto_reply: bool = False


@router.get("")
async def get_patterns(
    catalog: PatternCatalog = Depends(get_catalog),
    uc: ManagePatternsUseCase = Depends(get_manage_patterns_uc),
):
    """Active catalog grouped by pattern group, plus the stored overrides."""
    overrides = await uc.list_overrides()
    return {
        "source": catalog.source,
        "groups": catalog.to_dict(),
        "overrides": [r.to_dict() for r in overrides],
    }


@router.post("")
async def save_pattern(
    body: PatternIn,
    request: Request,
    uc: ManagePatternsUseCase = Depends(get_manage_patterns_uc),
    session: AsyncSession = Depends(get_session),
):
    """Create or replace an override. An empty pattern list disables the rule."""
    try:
        rule = PatternRule.from_dict(body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await uc.save(rule)
    await session.commit()
    request.app.state.catalog = await uc.load_catalog()
    return {"status": "ok", "pattern": rule.to_dict(), "source": request.app.state.catalog.source}


@router.delete("/{group}/{name}")
async def delete_pattern(
    group: str,
    name: str,
    request: Request,
    uc: ManagePatternsUseCase = Depends(get_manage_patterns_uc),
    session: AsyncSession = Depends(get_session),
):
    """Deactivate an override; the built-in rule (if any) applies again."""
    removed = await uc.remove(group, name)
    if not removed:
        raise HTTPException(status_code=404, detail="Pattern override not found")
    await session.commit()
    request.app.state.catalog = await uc.load_catalog()
    return {"status": "ok", "source": request.app.state.catalog.source}
