"""Analysis endpoints — classify a message, bulk vocabulary report."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.database import get_session
from helpdesk.application.use_cases.analyze_message import AnalyzeMessageUseCase
from helpdesk.application.use_cases.bulk_analyze import BulkAnalyzeUseCase
from helpdesk.infrastructure.api.dependencies import get_analyze_message_uc, get_bulk_analyze_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])

MIN_TEXT_LENGTH = 3


class AnalyzeRequest(BaseModel):
    text: str = Field(min_length=MIN_TEXT_LENGTH)
    message_id: int | None = None
    channel_id: str | None = None


@router.post("")
async def analyze_message(
    body: AnalyzeRequest,
    uc: AnalyzeMessageUseCase = Depends(get_analyze_message_uc),
    session: AsyncSession = Depends(get_session),
):
    """Classify a message; with message_id/channel_id also update stored state."""
    outcome = await uc.execute(body.text, message_id=body.message_id, channel_id=body.channel_id)
    if outcome.updated or outcome.channel_priority or outcome.awaiting_reply_cleared:
        await session.commit()
    return outcome.to_dict()


@router.get("")
async def analyze_text(
    text: str = Query(..., min_length=MIN_TEXT_LENGTH),
    uc: AnalyzeMessageUseCase = Depends(get_analyze_message_uc),
):
    """Classify a text without touching stored state."""
    outcome = await uc.execute(text)
    return outcome.to_dict()


@router.get("/bulk")
async def analyze_bulk(
    limit: int = Query(500, ge=1, le=5000),
    uc: BulkAnalyzeUseCase = Depends(get_bulk_analyze_uc),
):
    """Language / detector statistics over recent client messages."""
    report = await uc.execute(limit=limit)
    return report.to_dict()
