"""Tests for post-classification case policies."""

from datetime import datetime, timedelta, timezone

import pytest

from helpdesk.domain.entities.case import Case
from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.policies.case_policy import (
    auto_reply_gate,
    can_group_into,
    case_priority_for,
    case_severity_for,
    case_title,
    clears_awaiting_reply,
    escalated_channel_priority,
    should_open_ticket,
)
from helpdesk.domain.value_objects.enums import (
    Category,
    CasePriority,
    CaseSeverity,
    CaseStatus,
    ChannelPriority,
    Intent,
    SenderRole,
    Sentiment,
)

NOW = datetime(2024, 11, 4, 10, 0, tzinfo=timezone.utc)


def _result(**overrides) -> ClassificationResult:
    data = dict(
        category=Category.TECHNICAL,
        sentiment=Sentiment.NEGATIVE,
        intent=Intent.REPORT_PROBLEM,
        urgency=3,
        is_problem=True,
        needs_response=True,
        auto_reply_allowed=False,
        summary="Касса не работает",
    )
    data.update(overrides)
    return ClassificationResult(**data)


def _case(created_at=NOW, status=CaseStatus.DETECTED) -> Case:
    return Case(
        id=1,
        channel_id="chat-1",
        title="Касса не работает",
        category=Category.TECHNICAL,
        priority=CasePriority.MEDIUM,
        severity=CaseSeverity.NORMAL,
        status=status,
        created_at=created_at,
    )


# ─── Priority / severity ─────────────────────────────────────────────


@pytest.mark.parametrize(
    "urgency, priority, severity",
    [
        (5, CasePriority.URGENT, CaseSeverity.CRITICAL),
        (4, CasePriority.HIGH, CaseSeverity.HIGH),
        (3, CasePriority.MEDIUM, CaseSeverity.NORMAL),
        (2, CasePriority.MEDIUM, CaseSeverity.NORMAL),
        (1, CasePriority.LOW, CaseSeverity.NORMAL),
        (0, CasePriority.LOW, CaseSeverity.NORMAL),
    ],
)
def test_priority_and_severity(urgency, priority, severity):
    assert case_priority_for(urgency) == priority
    assert case_severity_for(urgency) == severity


# ─── Ticket opening ──────────────────────────────────────────────────


def test_should_open_ticket():
    assert should_open_ticket(_result(urgency=2))


def test_no_ticket_below_urgency_threshold():
    assert not should_open_ticket(_result(urgency=1))


def test_no_ticket_without_problem():
    assert not should_open_ticket(_result(is_problem=False))


def test_no_ticket_when_no_response_needed():
    assert not should_open_ticket(_result(needs_response=False))


# ─── Grouping ────────────────────────────────────────────────────────


def test_group_into_recent_case():
    assert can_group_into(_case(), NOW + timedelta(minutes=5), staff_replied_since_creation=False)


def test_no_grouping_after_window():
    assert not can_group_into(_case(), NOW + timedelta(minutes=11), staff_replied_since_creation=False)


def test_no_grouping_after_staff_reply():
    assert not can_group_into(_case(), NOW + timedelta(minutes=1), staff_replied_since_creation=True)


def test_no_grouping_into_closed_case():
    case = _case(status=CaseStatus.RESOLVED)
    assert not can_group_into(case, NOW + timedelta(minutes=1), staff_replied_since_creation=False)


def test_custom_window():
    assert can_group_into(
        _case(), NOW + timedelta(minutes=25), False, window=timedelta(minutes=30)
    )


# ─── Channel escalation ──────────────────────────────────────────────


def test_escalates_to_high():
    assert escalated_channel_priority(ChannelPriority.NORMAL, _result(urgency=3)) == ChannelPriority.HIGH


def test_escalates_to_urgent():
    assert escalated_channel_priority(ChannelPriority.HIGH, _result(urgency=4)) == ChannelPriority.URGENT


def test_never_downgrades():
    assert escalated_channel_priority(ChannelPriority.URGENT, _result(urgency=3)) is None


def test_no_escalation_without_problem():
    assert escalated_channel_priority(ChannelPriority.LOW, _result(is_problem=False, urgency=5)) is None


def test_no_escalation_for_low_urgency():
    assert escalated_channel_priority(ChannelPriority.LOW, _result(urgency=2)) is None


# ─── Awaiting reply / auto-reply ─────────────────────────────────────


def test_clears_awaiting_reply():
    assert clears_awaiting_reply(_result(needs_response=False))
    assert not clears_awaiting_reply(_result(needs_response=True))


def test_auto_reply_requires_client_sender():
    greeting = _result(
        intent=Intent.GREETING, is_problem=False, auto_reply_allowed=True, urgency=1
    )
    assert auto_reply_gate(greeting, SenderRole.CLIENT)
    assert not auto_reply_gate(greeting, SenderRole.SUPPORT)
    assert not auto_reply_gate(_result(auto_reply_allowed=False), SenderRole.CLIENT)


# ─── Title ───────────────────────────────────────────────────────────


def test_case_title_uses_summary():
    assert case_title(_result(summary="Касса не работает"), "other") == "Касса не работает"


def test_case_title_is_truncated():
    title = case_title(_result(summary="а" * 200), "")
    assert len(title) == 83
    assert title.endswith("...")


def test_case_title_falls_back_to_category():
    assert case_title(_result(summary=""), "") == "technical"
