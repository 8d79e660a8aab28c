"""Message ingestion endpoint — runs the full processing pipeline."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.database import get_session
from helpdesk.application.use_cases.process_message import ProcessingResult, ProcessMessageUseCase
from helpdesk.domain.entities.message import Message
from helpdesk.domain.value_objects.enums import SenderRole
from helpdesk.infrastructure.api.dependencies import get_process_message_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


class MessageIn(BaseModel):
    channel_id: str = Field(min_length=1, max_length=100)
    channel_name: str | None = None
    text: str = Field(min_length=1)
    sender_role: SenderRole = SenderRole.CLIENT
    sender_id: str | None = None
    sender_name: str | None = None
    created_at: datetime | None = None


@router.post("")
async def ingest_message(
    body: MessageIn,
    uc: ProcessMessageUseCase = Depends(get_process_message_uc),
    session: AsyncSession = Depends(get_session),
):
    """Store a message, classify it and apply the case policies."""
    message = Message(
        id=None,
        channel_id=body.channel_id,
        text=body.text,
        sender_role=body.sender_role,
        sender_id=body.sender_id,
        sender_name=body.sender_name,
        created_at=body.created_at,
    )
    try:
        result = await uc.execute(message, channel_name=body.channel_name)
        await session.commit()
    except Exception as e:
        logger.exception("Error processing message for channel %s", body.channel_id)
        raise HTTPException(status_code=500, detail=str(e))

    return _serialize_result(result)


def _serialize_result(r: ProcessingResult) -> dict:
    return {
        "message_id": r.message_id,
        "channel_id": r.channel_id,
        "analysis": r.classification.to_dict(),
        "auto_reply_candidate": r.auto_reply_candidate,
        "ticket": r.ticket.to_dict() if r.ticket else None,
        "channel_priority": r.channel_priority.value if r.channel_priority else None,
        "awaiting_reply": r.awaiting_reply,
        "commitment": {
            "kind": r.commitment.kind.value,
            "phrase": r.commitment.phrase,
            "due_at": r.commitment.due_at.isoformat(),
            "is_vague": r.commitment.is_vague,
        } if r.commitment else None,
        "errors": r.errors,
    }
