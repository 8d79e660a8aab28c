"""ProcessMessageUseCase — full pipeline for one incoming message.

Client messages: classify → urgency boost → project onto message →
awaiting-reply flag → channel escalation → ticket decision.
Staff messages: clear awaiting-reply, record the reply, detect commitments.

Every persistence step is best-effort and runs in its own savepoint: a
failure is logged, recorded in ``ProcessingResult.errors``, its writes are
rolled back and the remaining steps still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable
from zoneinfo import ZoneInfo

from helpdesk.application.ports.channel_repo import ChannelRepository
from helpdesk.application.ports.commitment_repo import CommitmentRepository
from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.application.ports.unit_of_work import NullUnitOfWork, UnitOfWork
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.application.use_cases.open_ticket import TicketDecisionUseCase, TicketOutcome, utcnow
from helpdesk.domain.entities.classification import ClassificationResult, summarize
from helpdesk.domain.entities.commitment import Commitment
from helpdesk.domain.entities.message import Message
from helpdesk.domain.policies.case_policy import (
    auto_reply_gate,
    clears_awaiting_reply,
    escalated_channel_priority,
    should_open_ticket,
)
from helpdesk.domain.policies.commitment import DetectedCommitment, detect_commitment
from helpdesk.domain.policies.urgency_boost import REPEAT_WINDOW, UrgencyContext, boost_urgency
from helpdesk.domain.value_objects.enums import Category, ChannelPriority, Intent, Sentiment

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Summary of one message's processing."""

    message_id: int | None
    channel_id: str
    classification: ClassificationResult
    ticket: TicketOutcome | None = None
    auto_reply_candidate: bool = False
    channel_priority: ChannelPriority | None = None  # set only when escalated
    awaiting_reply: bool | None = None
    commitment: DetectedCommitment | None = None
    errors: list[str] = field(default_factory=list)


def staff_reply_result(text: str) -> ClassificationResult:
    return ClassificationResult(
        category=Category.GENERAL,
        sentiment=Sentiment.NEUTRAL,
        intent=Intent.RESPONSE,
        urgency=0,
        is_problem=False,
        needs_response=False,
        auto_reply_allowed=False,
        summary=summarize(text),
    )


class ProcessMessageUseCase:
    """Orchestrates classification and the downstream case policies."""

    def __init__(
        self,
        classifier: ClassifyMessageUseCase,
        ticket_decision: TicketDecisionUseCase,
        message_repo: MessageRepository,
        channel_repo: ChannelRepository,
        commitment_repo: CommitmentRepository,
        auto_create_cases: bool = True,
        urgency_boost_enabled: bool = True,
        clock: Callable[[], datetime] = utcnow,
        uow: UnitOfWork | None = None,
        timezone: str | None = None,
    ):
        self._classifier = classifier
        self._tickets = ticket_decision
        self._messages = message_repo
        self._channels = channel_repo
        self._commitments = commitment_repo
        self._auto_create = auto_create_cases
        self._boost_enabled = urgency_boost_enabled
        self._clock = clock
        self._uow = uow or NullUnitOfWork()
        # wall-clock deadlines ("к 15:30") are read in this zone
        self._tz = ZoneInfo(timezone) if timezone else None

    async def execute(self, message: Message, channel_name: str | None = None) -> ProcessingResult:
        if message.created_at is None:
            message.created_at = self._clock()
        errors: list[str] = []

        channel = await self._attempt(
            errors, "channel", self._channels.get_or_create, message.channel_id, channel_name
        )
        saved = await self._attempt(errors, "save_message", self._messages.save, message)
        if saved is not None:
            message = saved

        if message.sender_role.is_staff:
            return await self._process_staff(message, errors)

        result = await self._classifier.execute(message.text)
        if self._boost_enabled and channel is not None:
            result = await self._boost(message, result, channel.last_team_message_at, errors)

        auto_reply = auto_reply_gate(result, message.sender_role)
        outcome = ProcessingResult(
            message_id=message.id,
            channel_id=message.channel_id,
            classification=result,
            auto_reply_candidate=auto_reply,
            errors=errors,
        )

        message.apply_classification(result, auto_reply)
        if message.id is not None:
            await self._attempt(
                errors, "update_message", self._messages.update_classification, message
            )

        awaiting = not clears_awaiting_reply(result)
        if await self._attempt(
            errors, "awaiting_reply", self._channels.set_awaiting_reply, message.channel_id, awaiting
        ) is not None:
            outcome.awaiting_reply = awaiting
        await self._attempt(
            errors,
            "channel_activity",
            self._channels.record_activity,
            message.channel_id,
            message.created_at,
            from_staff=False,
        )

        if channel is not None:
            new_priority = escalated_channel_priority(channel.priority, result)
            if new_priority is not None:
                await self._attempt(
                    errors, "escalate", self._channels.set_priority, message.channel_id, new_priority
                )
                outcome.channel_priority = new_priority
                logger.info(
                    "Channel %s escalated %s → %s",
                    message.channel_id, channel.priority.value, new_priority.value,
                )

        if self._auto_create and should_open_ticket(result):
            ticket = await self._tickets.execute(message, result)
            outcome.ticket = ticket
            if not ticket.success:
                errors.append(f"ticket: {ticket.reason}")

        logger.info(
            "Message %s in %s: category=%s, intent=%s, urgency=%d, problem=%s",
            message.id, message.channel_id, result.category.value,
            result.intent.value, result.urgency, result.is_problem,
        )
        return outcome

    async def _process_staff(self, message: Message, errors: list[str]) -> ProcessingResult:
        result = staff_reply_result(message.text)
        outcome = ProcessingResult(
            message_id=message.id,
            channel_id=message.channel_id,
            classification=result,
            errors=errors,
        )

        if await self._attempt(
            errors, "awaiting_reply", self._channels.set_awaiting_reply, message.channel_id, False
        ) is not None:
            outcome.awaiting_reply = False
        await self._attempt(
            errors,
            "channel_activity",
            self._channels.record_activity,
            message.channel_id,
            message.created_at,
            from_staff=True,
        )

        detected = detect_commitment(message.text, message.created_at, self._tz)
        if detected is not None:
            outcome.commitment = detected
            commitment = Commitment(
                id=None,
                channel_id=message.channel_id,
                message_id=message.id,
                kind=detected.kind,
                phrase=detected.phrase,
                due_at=detected.due_at,
                is_vague=detected.is_vague,
                sender_name=message.sender_name,
            )
            await self._attempt(errors, "commitment", self._commitments.save, commitment)
            logger.info(
                "Commitment (%s) in %s due %s: %r",
                detected.kind.value, message.channel_id, detected.due_at.isoformat(), detected.phrase,
            )
        return outcome

    async def _boost(
        self,
        message: Message,
        result: ClassificationResult,
        last_staff_reply_at: datetime | None,
        errors: list[str],
    ) -> ClassificationResult:
        count = 0
        if message.sender_id is not None:
            count = await self._attempt(
                errors,
                "repeat_problems",
                self._messages.count_recent_problems,
                message.channel_id,
                message.sender_id,
                since=message.created_at - REPEAT_WINDOW,
                exclude_id=message.id,
            ) or 0
        ctx = UrgencyContext(
            now=message.created_at,
            recent_problem_count=count,
            last_staff_reply_at=last_staff_reply_at,
        )
        boosted = boost_urgency(result, ctx)
        if boosted.urgency != result.urgency:
            logger.info(
                "Message %s urgency boosted %d → %d", message.id, result.urgency, boosted.urgency
            )
        return boosted

    async def _attempt(
        self, errors: list[str], step: str, call: Callable[..., Awaitable], *args, **kwargs
    ):
        try:
            async with self._uow.savepoint():
                return await call(*args, **kwargs)
        except Exception as e:
            logger.exception("Step %s failed", step)
            errors.append(f"{step}: {e}")
            return None
