"""TicketDecisionUseCase — create a case or group the message into a recent one.

The check-then-insert sequence is a per-channel critical section: an
in-process ``KeyedLock`` serializes coroutines of this worker, the
repository's ``lock_channel`` serializes workers, and the unique source
message constraint turns a lost race into "grouped". The store work runs in
a savepoint so a failed decision leaves the stored message intact.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from helpdesk.application.locks import KeyedLock
from helpdesk.application.ports.case_repo import CaseRepository, DuplicateCaseError
from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.application.ports.unit_of_work import NullUnitOfWork, UnitOfWork
from helpdesk.domain.entities.case import Case
from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.entities.message import Message
from helpdesk.domain.policies.case_policy import (
    DEFAULT_GROUPING_WINDOW,
    can_group_into,
    case_priority_for,
    case_severity_for,
    case_title,
)
from helpdesk.domain.value_objects.enums import CasePriority, TicketAction

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TicketOutcome:
    action: TicketAction
    case_id: int | None = None
    priority: CasePriority | None = None
    reason: str | None = None

    @property
    def success(self) -> bool:
        return self.action != TicketAction.FAILED

    @classmethod
    def skipped_existing(cls, case_id: int) -> "TicketOutcome":
        return cls(action=TicketAction.SKIPPED_EXISTING, case_id=case_id)

    @classmethod
    def grouped(cls, case_id: int | None) -> "TicketOutcome":
        return cls(action=TicketAction.GROUPED, case_id=case_id)

    @classmethod
    def created(cls, case_id: int, priority: CasePriority) -> "TicketOutcome":
        return cls(action=TicketAction.CREATED, case_id=case_id, priority=priority)

    @classmethod
    def failed(cls, reason: str) -> "TicketOutcome":
        return cls(action=TicketAction.FAILED, reason=reason)

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "case_id": self.case_id,
            "priority": self.priority.value if self.priority else None,
            "reason": self.reason,
        }


class TicketDecisionUseCase:
    """Decide skipped-existing / grouped / created for a problem message."""

    def __init__(
        self,
        case_repo: CaseRepository,
        message_repo: MessageRepository,
        locks: KeyedLock,
        grouping_window: timedelta = DEFAULT_GROUPING_WINDOW,
        clock: Callable[[], datetime] = utcnow,
        uow: UnitOfWork | None = None,
    ):
        self._cases = case_repo
        self._messages = message_repo
        self._locks = locks
        self._window = grouping_window
        self._clock = clock
        self._uow = uow or NullUnitOfWork()

    async def execute(self, message: Message, result: ClassificationResult) -> TicketOutcome:
        if message.id is None:
            return TicketOutcome.failed("message is not persisted")

        try:
            async with self._locks.hold(message.channel_id):
                async with self._uow.savepoint():
                    return await self._decide(message, result)
        except Exception as e:
            logger.exception("Ticket decision failed for message %s", message.id)
            return TicketOutcome.failed(str(e) or type(e).__name__)

    async def _decide(self, message: Message, result: ClassificationResult) -> TicketOutcome:
        await self._cases.lock_channel(message.channel_id)

        existing = await self._cases.get_by_source_message(message.id)
        if existing is not None:
            logger.info("Message %s already has case %s", message.id, existing.id)
            return TicketOutcome.skipped_existing(existing.id)

        now = self._clock()
        recent = await self._cases.find_recent_open_case(message.channel_id, since=now - self._window)
        if recent is not None:
            staff_replied = await self._messages.has_staff_message_since(
                message.channel_id, recent.created_at
            )
            if can_group_into(recent, now, staff_replied, self._window):
                await self._cases.attach_message(recent.id, message.id)
                logger.info("Message %s grouped into case %s", message.id, recent.id)
                return TicketOutcome.grouped(recent.id)

        priority = case_priority_for(result.urgency)
        case = Case(
            id=None,
            channel_id=message.channel_id,
            title=case_title(result, message.text),
            description=message.text,
            category=result.category,
            priority=priority,
            severity=case_severity_for(result.urgency),
            source_message_id=message.id,
            created_at=now,
            updated_at=now,
        )
        try:
            created = await self._cases.create(case)
        except DuplicateCaseError as e:
            logger.info("Concurrent case for message %s detected, grouping", message.id)
            return TicketOutcome.grouped(e.existing_case_id)

        logger.info(
            "Case %s created for message %s (priority=%s)",
            created.id, message.id, priority.value,
        )
        return TicketOutcome.created(created.id, priority)
