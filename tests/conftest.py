"""Pytest configuration, in-memory port fakes and shared fixtures."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest

from helpdesk.application.ports.case_repo import CaseRepository, DuplicateCaseError
from helpdesk.application.ports.channel_repo import ChannelRepository
from helpdesk.application.ports.commitment_repo import CommitmentRepository
from helpdesk.application.ports.llm_port import LLMPort
from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.application.ports.pattern_repo import PatternRepository
from helpdesk.application.ports.unit_of_work import UnitOfWork
from helpdesk.domain.entities.channel import Channel

NOW = datetime(2024, 11, 4, 10, 0, tzinfo=timezone.utc)


# ─── In-memory fakes ────────────────────────────────────────────────


class FakeUnitOfWork(UnitOfWork):
    """Mimics a PG transaction: an error raised outside any savepoint poisons it."""

    def __init__(self):
        self.depth = 0
        self.savepoints = 0
        self.rolled_back = 0
        self.poisoned = False

    @asynccontextmanager
    async def savepoint(self):
        self.depth += 1
        self.savepoints += 1
        try:
            yield
        except Exception:
            self.rolled_back += 1
            raise
        finally:
            self.depth -= 1

    def fail(self, error: Exception):
        if self.depth == 0:
            self.poisoned = True
        raise error


def _raise(uow: FakeUnitOfWork | None, error: Exception):
    if uow is not None:
        uow.fail(error)
    raise error


class FakeLLM(LLMPort):
    def __init__(self, payload=None, error: Exception | None = None, delay: float = 0.0, configured=True):
        self._payload = payload
        self._error = error
        self._delay = delay
        self._configured = configured
        self.calls: list[str] = []

    @property
    def is_configured(self):
        return self._configured

    async def classify(self, text):
        self.calls.append(text)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._payload


class FakeMessageRepo(MessageRepository):
    def __init__(self):
        self.messages: dict = {}
        self.fail_on_update = False
        self.uow: FakeUnitOfWork | None = None

    async def save(self, message):
        message.id = len(self.messages) + 1
        self.messages[message.id] = message
        return message

    async def get_by_id(self, message_id):
        return self.messages.get(message_id)

    async def update_classification(self, message):
        if self.fail_on_update:
            _raise(self.uow, RuntimeError("database is unavailable"))
        self.messages[message.id] = message

    async def count_recent_problems(self, channel_id, sender_id, since, exclude_id=None):
        return sum(
            1
            for m in self.messages.values()
            if m.channel_id == channel_id
            and m.sender_id == sender_id
            and m.is_problem
            and m.id != exclude_id
            and m.created_at is not None
            and m.created_at >= since
        )

    async def has_staff_message_since(self, channel_id, since):
        return any(
            m.channel_id == channel_id
            and m.sender_role.is_staff
            and m.created_at is not None
            and m.created_at > since
            for m in self.messages.values()
        )

    async def get_recent(self, limit=200, from_clients_only=True):
        messages = [
            m for m in self.messages.values() if not (from_clients_only and m.sender_role.is_staff)
        ]
        return messages[-limit:]


class FakeCaseRepo(CaseRepository):
    """Yields to the event loop between the read and the write of each step."""

    def __init__(self):
        self.cases: dict = {}
        self.attached: list[tuple[int, int]] = []
        self.locked: list[str] = []
        self.fail_on_create = False
        self.fail_on_attach = False
        self.uow: FakeUnitOfWork | None = None

    async def lock_channel(self, channel_id):
        self.locked.append(channel_id)

    async def get_by_id(self, case_id):
        return self.cases.get(case_id)

    async def get_by_source_message(self, message_id):
        return next((c for c in self.cases.values() if c.source_message_id == message_id), None)

    async def find_recent_open_case(self, channel_id, since):
        await asyncio.sleep(0)
        candidates = [
            c for c in self.cases.values()
            if c.channel_id == channel_id and c.is_open() and c.created_at >= since
        ]
        return max(candidates, key=lambda c: c.created_at, default=None)

    async def create(self, case):
        await asyncio.sleep(0)
        if self.fail_on_create:
            _raise(self.uow, RuntimeError("insert failed"))
        existing = await self.get_by_source_message(case.source_message_id)
        if existing is not None:
            raise DuplicateCaseError(case.source_message_id, existing.id)
        case.id = len(self.cases) + 1
        case.ticket_number = 1000 + case.id
        self.cases[case.id] = case
        return case

    async def attach_message(self, case_id, message_id):
        if self.fail_on_attach:
            _raise(self.uow, RuntimeError("attach failed"))
        case = self.cases[case_id]
        case.messages_count += 1
        self.attached.append((case_id, message_id))
        return case

    async def list_cases(self, status=None, channel_id=None, limit=100):
        cases = [
            c for c in self.cases.values()
            if (status is None or c.status == status) and (channel_id is None or c.channel_id == channel_id)
        ]
        return cases[:limit]


class FakeChannelRepo(ChannelRepository):
    def __init__(self, channels: list[Channel] | None = None):
        self.channels = {c.id: c for c in channels or []}

    async def get_or_create(self, channel_id, name=None):
        if channel_id not in self.channels:
            self.channels[channel_id] = Channel(id=channel_id, name=name)
        return self.channels[channel_id]

    async def set_priority(self, channel_id, priority):
        self.channels[channel_id].priority = priority

    async def set_awaiting_reply(self, channel_id, awaiting):
        channel = self.channels[channel_id]
        changed = channel.awaiting_reply != awaiting
        channel.awaiting_reply = awaiting
        return changed

    async def record_activity(self, channel_id, at, from_staff):
        channel = self.channels[channel_id]
        if from_staff:
            channel.last_team_message_at = at
        else:
            channel.last_client_message_at = at


class FakePatternRepo(PatternRepository):
    def __init__(self, rules=None, error: Exception | None = None):
        self.rules = {r.key: r for r in rules or []}
        self._error = error

    async def list_active(self):
        if self._error is not None:
            raise self._error
        return list(self.rules.values())

    async def upsert(self, rule):
        self.rules[rule.key] = rule
        return rule

    async def deactivate(self, group, name):
        return self.rules.pop(f"{group}:{name}", None) is not None


class FakeCommitmentRepo(CommitmentRepository):
    def __init__(self):
        self.commitments: list = []

    async def save(self, commitment):
        commitment.id = len(self.commitments) + 1
        self.commitments.append(commitment)
        return commitment

    async def list_pending(self, channel_id=None):
        return [
            c for c in self.commitments
            if c.status == "pending" and (channel_id is None or c.channel_id == channel_id)
        ]


# ─── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def message_repo():
    return FakeMessageRepo()


@pytest.fixture
def case_repo():
    return FakeCaseRepo()


@pytest.fixture
def channel_repo():
    return FakeChannelRepo()


@pytest.fixture
def commitment_repo():
    return FakeCommitmentRepo()


@pytest.fixture
def sample_problem_ru():
    return "Приложение не открывается, ошибка при входе"


@pytest.fixture
def sample_billing_ru():
    return "Почему в чеке 50000, если было 40000?"


@pytest.fixture
def sample_problem_uz():
    return "Kassa ishlamayapti, iltimos yordam bering"
