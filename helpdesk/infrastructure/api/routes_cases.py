"""Case endpoints — list + detail view."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from helpdesk.adapters.persistence.repositories import SqlCaseRepository
from helpdesk.domain.entities.case import Case
from helpdesk.domain.value_objects.enums import CaseStatus
from helpdesk.infrastructure.api.dependencies import get_case_repo

router = APIRouter(prefix="/cases", tags=["cases"])


@router.get("")
async def list_cases(
    status: CaseStatus | None = None,
    channel_id: str | None = None,
    limit: int = Query(100, ge=1, le=1000),
    repo: SqlCaseRepository = Depends(get_case_repo),
):
    """List cases, newest first."""
    cases = await repo.list_cases(status=status, channel_id=channel_id, limit=limit)
    return {
        "total": len(cases),
        "cases": [_serialize_case(c) for c in cases],
    }


@router.get("/{case_id}")
async def get_case(case_id: int, repo: SqlCaseRepository = Depends(get_case_repo)):
    """Get a single case."""
    case = await repo.get_by_id(case_id)
    if not case:
        raise HTTPException(status_code=404, detail="Case not found")
    return _serialize_case(case)


def _serialize_case(c: Case) -> dict:
    return {
        "id": c.id,
        "ticket_number": c.ticket_number,
        "channel_id": c.channel_id,
        "title": c.title,
        "description": c.description,
        "category": c.category.value,
        "priority": c.priority.value,
        "severity": c.severity.value,
        "status": c.status.value,
        "source_message_id": c.source_message_id,
        "messages_count": c.messages_count,
        "created_at": c.created_at.isoformat() if c.created_at else None,
        "updated_at": c.updated_at.isoformat() if c.updated_at else None,
    }
