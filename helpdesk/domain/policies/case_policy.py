"""CasePolicy — pure decisions taken after a message has been classified."""

from __future__ import annotations

from datetime import datetime, timedelta

from helpdesk.domain.entities.case import Case
from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.value_objects.enums import (
    CasePriority,
    CaseSeverity,
    ChannelPriority,
    SenderRole,
)

DEFAULT_GROUPING_WINDOW = timedelta(minutes=10)
MIN_TICKET_URGENCY = 2
MIN_ESCALATION_URGENCY = 3
TITLE_LENGTH = 80


def case_priority_for(urgency: int) -> CasePriority:
    """≥5 urgent, 4 high, 2–3 medium, ≤1 low."""
    if urgency >= 5:
        return CasePriority.URGENT
    if urgency == 4:
        return CasePriority.HIGH
    if urgency >= 2:
        return CasePriority.MEDIUM
    return CasePriority.LOW


def case_severity_for(urgency: int) -> CaseSeverity:
    if urgency >= 5:
        return CaseSeverity.CRITICAL
    if urgency == 4:
        return CaseSeverity.HIGH
    return CaseSeverity.NORMAL


def should_open_ticket(result: ClassificationResult) -> bool:
    return result.is_problem and result.needs_response and result.urgency >= MIN_TICKET_URGENCY


def can_group_into(
    case: Case,
    now: datetime,
    staff_replied_since_creation: bool,
    window: timedelta = DEFAULT_GROUPING_WINDOW,
) -> bool:
    """A case accepts follow-up messages while it is open, recent and unanswered."""
    if not case.is_open() or case.created_at is None:
        return False
    if staff_replied_since_creation:
        return False
    return now - case.created_at <= window


def escalated_channel_priority(
    current: ChannelPriority, result: ClassificationResult
) -> ChannelPriority | None:
    """Return the new channel priority, or None when no change is needed.

    Never downgrades an existing higher priority.
    """
    if not result.is_problem or result.urgency < MIN_ESCALATION_URGENCY:
        return None
    target = ChannelPriority.URGENT if result.urgency >= 4 else ChannelPriority.HIGH
    if current.rank >= target.rank:
        return None
    return target


def clears_awaiting_reply(result: ClassificationResult) -> bool:
    return not result.needs_response


def auto_reply_gate(result: ClassificationResult, sender_role: SenderRole) -> bool:
    """Auto-reply needs both an eligible classification and a client sender."""
    return result.auto_reply_allowed and sender_role == SenderRole.CLIENT


def case_title(result: ClassificationResult, text: str) -> str:
    source = (result.summary or text or "").strip()
    first_line = source.splitlines()[0] if source else result.category.value
    if len(first_line) > TITLE_LENGTH:
        return first_line[:TITLE_LENGTH].rstrip() + "..."
    return first_line
