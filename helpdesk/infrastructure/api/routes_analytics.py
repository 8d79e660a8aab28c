"""Analytics endpoints — dashboard summary + pending commitments."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.database import get_session
from helpdesk.adapters.persistence.models import (
    CaseModel,
    ChannelModel,
    CommitmentModel,
    MessageModel,
)
from helpdesk.adapters.persistence.repositories import SqlCommitmentRepository

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary")
async def analytics_summary(session: AsyncSession = Depends(get_session)):
    """Aggregate stats for the dashboard."""
    total_messages = (
        await session.execute(select(func.count(MessageModel.id)))
    ).scalar() or 0

    classified = (
        await session.execute(
            select(func.count(MessageModel.id)).where(MessageModel.category.is_not(None))
        )
    ).scalar() or 0

    problems = (
        await session.execute(
            select(func.count(MessageModel.id)).where(MessageModel.is_problem.is_(True))
        )
    ).scalar() or 0

    # By category
    category_rows = (
        await session.execute(
            select(MessageModel.category, func.count(MessageModel.id))
            .where(MessageModel.category.is_not(None))
            .group_by(MessageModel.category)
        )
    ).all()
    by_category = {row[0]: row[1] for row in category_rows}

    # By sentiment
    sentiment_rows = (
        await session.execute(
            select(MessageModel.sentiment, func.count(MessageModel.id))
            .where(MessageModel.sentiment.is_not(None))
            .group_by(MessageModel.sentiment)
        )
    ).all()
    by_sentiment = {row[0]: row[1] for row in sentiment_rows}

    # Cases by status / priority
    status_rows = (
        await session.execute(
            select(CaseModel.status, func.count(CaseModel.id)).group_by(CaseModel.status)
        )
    ).all()
    cases_by_status = {row[0]: row[1] for row in status_rows}

    priority_rows = (
        await session.execute(
            select(CaseModel.priority, func.count(CaseModel.id)).group_by(CaseModel.priority)
        )
    ).all()
    cases_by_priority = {row[0]: row[1] for row in priority_rows}

    # Channels waiting for the team
    awaiting = (
        await session.execute(
            select(func.count(ChannelModel.id)).where(ChannelModel.awaiting_reply.is_(True))
        )
    ).scalar() or 0

    pending_commitments = (
        await session.execute(
            select(func.count(CommitmentModel.id)).where(CommitmentModel.status == "pending")
        )
    ).scalar() or 0

    return {
        "total_messages": total_messages,
        "classified": classified,
        "problems": problems,
        "by_category": by_category,
        "by_sentiment": by_sentiment,
        "cases_by_status": cases_by_status,
        "cases_by_priority": cases_by_priority,
        "channels_awaiting_reply": awaiting,
        "pending_commitments": pending_commitments,
    }


@router.get("/commitments")
async def pending_commitments(
    channel_id: str | None = None,
    session: AsyncSession = Depends(get_session),
):
    """Pending staff promises, earliest deadline first."""
    commitments = await SqlCommitmentRepository(session).list_pending(channel_id)
    return {
        "total": len(commitments),
        "commitments": [
            {
                "id": c.id,
                "channel_id": c.channel_id,
                "message_id": c.message_id,
                "kind": c.kind.value,
                "phrase": c.phrase,
                "due_at": c.due_at.isoformat(),
                "is_vague": c.is_vague,
                "sender_name": c.sender_name,
            }
            for c in commitments
        ],
    }
