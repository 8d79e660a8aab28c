"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import exists, func, select, text, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.persistence.models import (
    CaseActivityModel,
    CaseModel,
    ChannelModel,
    CommitmentModel,
    MessageModel,
    PatternOverrideModel,
)
from helpdesk.application.ports.case_repo import CaseRepository, DuplicateCaseError
from helpdesk.application.ports.channel_repo import ChannelRepository
from helpdesk.application.ports.commitment_repo import CommitmentRepository
from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.application.ports.pattern_repo import PatternRepository
from helpdesk.application.ports.unit_of_work import UnitOfWork
from helpdesk.domain.entities.case import Case
from helpdesk.domain.entities.channel import Channel
from helpdesk.domain.entities.commitment import Commitment
from helpdesk.domain.entities.message import Message
from helpdesk.domain.value_objects.enums import (
    CasePriority,
    CaseSeverity,
    CaseStatus,
    Category,
    ChannelPriority,
    CommitmentKind,
    Intent,
    SenderRole,
    Sentiment,
)
from helpdesk.domain.value_objects.pattern_catalog import PatternRule

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = [s.value for s in CaseStatus if s.is_terminal]

# ─── Mappers ─────────────────────────────────────────────────────────


def _channel_to_domain(m: ChannelModel) -> Channel:
    return Channel(
        id=m.id,
        name=m.name,
        priority=ChannelPriority(m.priority),
        awaiting_reply=m.awaiting_reply,
        last_client_message_at=m.last_client_message_at,
        last_team_message_at=m.last_team_message_at,
    )


def _message_to_domain(m: MessageModel) -> Message:
    return Message(
        id=m.id,
        channel_id=m.channel_id,
        text=m.text,
        sender_role=SenderRole(m.sender_role),
        sender_id=m.sender_id,
        sender_name=m.sender_name,
        created_at=m.created_at,
        category=Category(m.category) if m.category else None,
        sentiment=Sentiment(m.sentiment) if m.sentiment else None,
        intent=Intent(m.intent) if m.intent else None,
        urgency=m.urgency,
        is_problem=m.is_problem,
        needs_response=m.needs_response,
        auto_reply_candidate=m.auto_reply_candidate,
        summary=m.summary,
        entities=dict(m.entities or {}),
        case_id=m.case_id,
    )


def _case_to_domain(m: CaseModel) -> Case:
    return Case(
        id=m.id,
        channel_id=m.channel_id,
        title=m.title,
        description=m.description,
        category=Category(m.category),
        priority=CasePriority(m.priority),
        severity=CaseSeverity(m.severity),
        status=CaseStatus(m.status),
        source_message_id=m.source_message_id,
        ticket_number=m.ticket_number,
        messages_count=m.messages_count,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


def _commitment_to_domain(m: CommitmentModel) -> Commitment:
    return Commitment(
        id=m.id,
        channel_id=m.channel_id,
        message_id=m.message_id,
        kind=CommitmentKind(m.kind),
        phrase=m.phrase,
        due_at=m.due_at,
        is_vague=m.is_vague,
        sender_name=m.sender_name,
        status=m.status,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlChannelRepository(ChannelRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_or_create(self, channel_id: str, name: str | None = None) -> Channel:
        await self._s.execute(
            pg_insert(ChannelModel)
            .values(id=channel_id, name=name, priority=ChannelPriority.NORMAL.value, awaiting_reply=False)
            .on_conflict_do_nothing(index_elements=["id"])
        )
        m = await self._s.get(ChannelModel, channel_id, populate_existing=True)
        return _channel_to_domain(m)

    async def set_priority(self, channel_id: str, priority: ChannelPriority) -> None:
        await self._s.execute(
            update(ChannelModel).where(ChannelModel.id == channel_id).values(priority=priority.value)
        )
        await self._s.flush()

    async def set_awaiting_reply(self, channel_id: str, awaiting: bool) -> bool:
        result = await self._s.execute(
            update(ChannelModel)
            .where(ChannelModel.id == channel_id, ChannelModel.awaiting_reply.is_not(awaiting))
            .values(awaiting_reply=awaiting)
        )
        await self._s.flush()
        return result.rowcount > 0

    async def record_activity(self, channel_id: str, at: datetime, from_staff: bool) -> None:
        column = "last_team_message_at" if from_staff else "last_client_message_at"
        await self._s.execute(
            update(ChannelModel).where(ChannelModel.id == channel_id).values({column: at})
        )
        await self._s.flush()


class SqlMessageRepository(MessageRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, message: Message) -> Message:
        m = MessageModel(
            channel_id=message.channel_id,
            text=message.text,
            sender_role=message.sender_role.value,
            sender_id=message.sender_id,
            sender_name=message.sender_name,
            entities=dict(message.entities),
            created_at=message.created_at or datetime.now(timezone.utc),
        )
        self._s.add(m)
        await self._s.flush()
        message.id = m.id
        message.created_at = m.created_at
        return message

    async def get_by_id(self, message_id: int) -> Message | None:
        m = await self._s.get(MessageModel, message_id)
        return _message_to_domain(m) if m else None

    async def update_classification(self, message: Message) -> None:
        await self._s.execute(
            update(MessageModel)
            .where(MessageModel.id == message.id)
            .values(
                category=message.category.value if message.category else None,
                sentiment=message.sentiment.value if message.sentiment else None,
                intent=message.intent.value if message.intent else None,
                urgency=message.urgency,
                is_problem=message.is_problem,
                needs_response=message.needs_response,
                auto_reply_candidate=message.auto_reply_candidate,
                summary=message.summary,
                entities=dict(message.entities),
            )
        )
        await self._s.flush()

    async def count_recent_problems(
        self, channel_id: str, sender_id: str | None, since: datetime, exclude_id: int | None = None
    ) -> int:
        stmt = select(func.count(MessageModel.id)).where(
            MessageModel.channel_id == channel_id,
            MessageModel.sender_id == sender_id,
            MessageModel.is_problem.is_(True),
            MessageModel.created_at >= since,
        )
        if exclude_id is not None:
            stmt = stmt.where(MessageModel.id != exclude_id)
        return (await self._s.execute(stmt)).scalar() or 0

    async def has_staff_message_since(self, channel_id: str, since: datetime) -> bool:
        stmt = select(
            exists().where(
                MessageModel.channel_id == channel_id,
                MessageModel.sender_role != SenderRole.CLIENT.value,
                MessageModel.created_at > since,
            )
        )
        return bool((await self._s.execute(stmt)).scalar())

    async def get_recent(self, limit: int = 200, from_clients_only: bool = True) -> list[Message]:
        stmt = select(MessageModel).order_by(MessageModel.created_at.desc()).limit(limit)
        if from_clients_only:
            stmt = stmt.where(MessageModel.sender_role == SenderRole.CLIENT.value)
        result = await self._s.execute(stmt)
        return [_message_to_domain(m) for m in result.scalars()]


class SqlCaseRepository(CaseRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def lock_channel(self, channel_id: str) -> None:
        # Transaction-scoped: released on commit / rollback
        await self._s.execute(
            text("SELECT pg_advisory_xact_lock(hashtext(:channel_id))"),
            {"channel_id": channel_id},
        )

    async def get_by_id(self, case_id: int) -> Case | None:
        m = await self._s.get(CaseModel, case_id)
        return _case_to_domain(m) if m else None

    async def get_by_source_message(self, message_id: int) -> Case | None:
        result = await self._s.execute(
            select(CaseModel).where(CaseModel.source_message_id == message_id)
        )
        m = result.scalar_one_or_none()
        return _case_to_domain(m) if m else None

    async def find_recent_open_case(self, channel_id: str, since: datetime) -> Case | None:
        result = await self._s.execute(
            select(CaseModel)
            .where(
                CaseModel.channel_id == channel_id,
                CaseModel.status.not_in(TERMINAL_STATUSES),
                CaseModel.created_at >= since,
            )
            .order_by(CaseModel.created_at.desc())
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _case_to_domain(m) if m else None

    async def create(self, case: Case) -> Case:
        m = CaseModel(
            channel_id=case.channel_id,
            title=case.title[:255],
            description=case.description,
            category=case.category.value,
            priority=case.priority.value,
            severity=case.severity.value,
            status=case.status.value,
            source_message_id=case.source_message_id,
            messages_count=case.messages_count,
            created_at=case.created_at or datetime.now(timezone.utc),
        )
        m.updated_at = m.created_at
        try:
            async with self._s.begin_nested():
                self._s.add(m)
                await self._s.flush()
        except IntegrityError as e:
            existing = await self.get_by_source_message(case.source_message_id)
            raise DuplicateCaseError(
                case.source_message_id, existing.id if existing else None
            ) from e

        if case.source_message_id is not None:
            await self._s.execute(
                update(MessageModel)
                .where(MessageModel.id == case.source_message_id)
                .values(case_id=m.id)
            )
        self._s.add(CaseActivityModel(case_id=m.id, kind="created", message_id=case.source_message_id))
        await self._s.flush()
        return _case_to_domain(m)

    async def attach_message(self, case_id: int, message_id: int) -> Case:
        await self._s.execute(
            update(MessageModel).where(MessageModel.id == message_id).values(case_id=case_id)
        )
        await self._s.execute(
            update(CaseModel)
            .where(CaseModel.id == case_id)
            .values(messages_count=CaseModel.messages_count + 1, updated_at=func.now())
        )
        self._s.add(CaseActivityModel(case_id=case_id, kind="message_grouped", message_id=message_id))
        await self._s.flush()
        m = await self._s.get(CaseModel, case_id, populate_existing=True)
        return _case_to_domain(m)

    async def list_cases(
        self,
        status: CaseStatus | None = None,
        channel_id: str | None = None,
        limit: int = 100,
    ) -> list[Case]:
        stmt = select(CaseModel).order_by(CaseModel.created_at.desc()).limit(limit)
        if status is not None:
            stmt = stmt.where(CaseModel.status == status.value)
        if channel_id is not None:
            stmt = stmt.where(CaseModel.channel_id == channel_id)
        result = await self._s.execute(stmt)
        return [_case_to_domain(m) for m in result.scalars()]


class SqlPatternRepository(PatternRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active(self) -> list[PatternRule]:
        result = await self._s.execute(
            select(PatternOverrideModel)
            .where(PatternOverrideModel.is_active.is_(True))
            .order_by(PatternOverrideModel.id)
        )
        rules: list[PatternRule] = []
        for m in result.scalars():
            try:
                rules.append(PatternRule.from_dict({**m.data, "group": m.group, "name": m.name}))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping invalid pattern override %s:%s: %s", m.group, m.name, e)
        return rules

    async def upsert(self, rule: PatternRule) -> PatternRule:
        data = rule.to_dict()
        stmt = pg_insert(PatternOverrideModel).values(
            group=rule.group, name=rule.name, data=data, is_active=True
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_pattern_overrides_key",
            set_={"data": stmt.excluded.data, "is_active": True, "updated_at": func.now()},
        )
        await self._s.execute(stmt)
        await self._s.flush()
        return rule

    async def deactivate(self, group: str, name: str) -> bool:
        result = await self._s.execute(
            update(PatternOverrideModel)
            .where(
                PatternOverrideModel.group == group,
                PatternOverrideModel.name == name,
                PatternOverrideModel.is_active.is_(True),
            )
            .values(is_active=False)
        )
        await self._s.flush()
        return result.rowcount > 0


class SqlCommitmentRepository(CommitmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, commitment: Commitment) -> Commitment:
        m = CommitmentModel(
            channel_id=commitment.channel_id,
            message_id=commitment.message_id,
            kind=commitment.kind.value,
            phrase=commitment.phrase[:255],
            due_at=commitment.due_at,
            is_vague=commitment.is_vague,
            sender_name=commitment.sender_name,
            status=commitment.status,
        )
        self._s.add(m)
        await self._s.flush()
        commitment.id = m.id
        return commitment

    async def list_pending(self, channel_id: str | None = None) -> list[Commitment]:
        stmt = (
            select(CommitmentModel)
            .where(CommitmentModel.status == "pending")
            .order_by(CommitmentModel.due_at)
        )
        if channel_id is not None:
            stmt = stmt.where(CommitmentModel.channel_id == channel_id)
        result = await self._s.execute(stmt)
        return [_commitment_to_domain(m) for m in result.scalars()]


class SqlUnitOfWork(UnitOfWork):
    """Savepoints on the request session (``SAVEPOINT`` / ``ROLLBACK TO``)."""

    def __init__(self, session: AsyncSession):
        self._s = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self._s.begin_nested():
            yield
