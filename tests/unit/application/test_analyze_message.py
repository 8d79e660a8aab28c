"""Tests for AnalyzeMessageUseCase side effects."""

import pytest

from conftest import FakeChannelRepo, FakeMessageRepo, FakeUnitOfWork
from helpdesk.application.use_cases.analyze_message import AnalyzeMessageUseCase
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.domain.entities.channel import Channel
from helpdesk.domain.entities.message import Message
from helpdesk.domain.value_objects.enums import Category, ChannelPriority, Language, SenderRole


def _make_use_case(message_repo, channel_repo, uow=None):
    return AnalyzeMessageUseCase(
        classifier=ClassifyMessageUseCase(llm=None),
        message_repo=message_repo,
        channel_repo=channel_repo,
        uow=uow,
    )


@pytest.mark.asyncio
async def test_pure_classification(message_repo, channel_repo, sample_billing_ru):
    outcome = await _make_use_case(message_repo, channel_repo).execute(sample_billing_ru)

    assert outcome.classification.category == Category.BILLING
    assert outcome.language == Language.RU
    assert not outcome.updated
    assert outcome.errors == []
    assert channel_repo.channels == {}

    data = outcome.to_dict()
    assert data["analysis"]["category"] == "billing"
    assert data["language"] == "ru"


@pytest.mark.asyncio
async def test_updates_stored_message_and_escalates(message_repo, sample_billing_ru):
    channel_repo = FakeChannelRepo([Channel(id="chat-7", awaiting_reply=True)])
    saved = await message_repo.save(Message(id=None, channel_id="chat-7", text=sample_billing_ru))

    outcome = await _make_use_case(message_repo, channel_repo).execute(sample_billing_ru, message_id=saved.id)

    assert outcome.updated
    assert outcome.channel_priority == ChannelPriority.HIGH
    assert not outcome.awaiting_reply_cleared
    stored = message_repo.messages[saved.id]
    assert stored.category == Category.BILLING
    assert stored.is_problem
    assert channel_repo.channels["chat-7"].priority == ChannelPriority.HIGH


@pytest.mark.asyncio
async def test_gratitude_clears_awaiting_reply(message_repo):
    channel_repo = FakeChannelRepo([Channel(id="chat-7", awaiting_reply=True)])
    outcome = await _make_use_case(message_repo, channel_repo).execute("Katta rahmat", channel_id="chat-7")

    assert outcome.awaiting_reply_cleared
    assert outcome.channel_priority is None
    assert not channel_repo.channels["chat-7"].awaiting_reply


@pytest.mark.asyncio
async def test_staff_message_is_not_marked_for_auto_reply(message_repo, channel_repo):
    saved = await message_repo.save(
        Message(id=None, channel_id="chat-7", text="Здравствуйте!", sender_role=SenderRole.SUPPORT)
    )
    outcome = await _make_use_case(message_repo, channel_repo).execute("Здравствуйте!", message_id=saved.id)

    assert outcome.classification.auto_reply_allowed
    assert not message_repo.messages[saved.id].auto_reply_candidate


@pytest.mark.asyncio
async def test_missing_message_is_reported(message_repo, channel_repo, sample_problem_ru):
    outcome = await _make_use_case(message_repo, channel_repo).execute(sample_problem_ru, message_id=42)

    assert outcome.classification.is_problem
    assert not outcome.updated
    assert outcome.errors == ["message 42 not found"]


@pytest.mark.asyncio
async def test_store_failure_keeps_classification(message_repo, channel_repo, sample_problem_ru):
    saved = await message_repo.save(Message(id=None, channel_id="chat-7", text=sample_problem_ru))
    message_repo.fail_on_update = True

    outcome = await _make_use_case(message_repo, channel_repo).execute(sample_problem_ru, message_id=saved.id)

    assert outcome.classification.is_problem
    assert not outcome.updated
    assert outcome.errors == ["database is unavailable"]


@pytest.mark.asyncio
async def test_store_failure_does_not_block_channel_policies(message_repo, channel_repo, sample_problem_ru):
    uow = FakeUnitOfWork()
    message_repo.uow = uow
    saved = await message_repo.save(Message(id=None, channel_id="chat-7", text=sample_problem_ru))
    message_repo.fail_on_update = True

    outcome = await _make_use_case(message_repo, channel_repo, uow=uow).execute(
        sample_problem_ru, message_id=saved.id, channel_id="chat-7"
    )

    assert not outcome.updated
    assert outcome.errors == ["database is unavailable"]
    assert uow.savepoints == 2
    assert uow.rolled_back == 1
    assert not uow.poisoned
    assert "chat-7" in channel_repo.channels
