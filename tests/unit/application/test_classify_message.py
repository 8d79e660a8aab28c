"""Tests for ClassifyMessageUseCase with a fake model."""

import asyncio

import pytest

from conftest import FakeLLM
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.domain.policies.heuristics import analyze_without_ai
from helpdesk.domain.value_objects.enums import Category, Intent

MODEL_REPLY = {
    "category": "integration",
    "sentiment": "negative",
    "intent": "report_problem",
    "urgency": 3,
    "isProblem": True,
    "needsResponse": True,
    "autoReplyAllowed": False,
    "summary": "Заказы из Wolt не приходят",
    "entities": {"integration": "wolt"},
}


@pytest.mark.asyncio
async def test_fast_path_skips_model():
    llm = FakeLLM(payload=MODEL_REPLY)
    result = await ClassifyMessageUseCase(llm=llm).execute("Rahmat!")
    assert result.intent == Intent.GRATITUDE
    assert llm.calls == []


@pytest.mark.asyncio
async def test_model_result_is_used():
    llm = FakeLLM(payload=MODEL_REPLY)
    result = await ClassifyMessageUseCase(llm=llm).execute("Заказы из Wolt не приходят с утра")
    assert result.category == Category.INTEGRATION
    assert result.entities == {"integration": "wolt"}
    assert llm.calls == ["Заказы из Wolt не приходят с утра"]


@pytest.mark.asyncio
async def test_without_model_uses_heuristics(sample_problem_ru):
    result = await ClassifyMessageUseCase(llm=None).execute(sample_problem_ru)
    assert result == analyze_without_ai(sample_problem_ru)


@pytest.mark.asyncio
async def test_unconfigured_model_is_not_called(sample_problem_ru):
    llm = FakeLLM(payload=MODEL_REPLY, configured=False)
    result = await ClassifyMessageUseCase(llm=llm).execute(sample_problem_ru)
    assert llm.calls == []
    assert result.category == Category.TECHNICAL


@pytest.mark.asyncio
async def test_model_error_falls_back(sample_problem_ru):
    llm = FakeLLM(error=ConnectionError("network down"))
    result = await ClassifyMessageUseCase(llm=llm).execute(sample_problem_ru)
    assert result == analyze_without_ai(sample_problem_ru)


@pytest.mark.asyncio
async def test_model_without_answer_falls_back(sample_billing_ru):
    result = await ClassifyMessageUseCase(llm=FakeLLM(payload=None)).execute(sample_billing_ru)
    assert result.category == Category.BILLING
    assert result.urgency == 3


@pytest.mark.asyncio
async def test_model_timeout_falls_back(sample_problem_ru):
    llm = FakeLLM(payload=MODEL_REPLY, delay=1.0)
    result = await ClassifyMessageUseCase(llm=llm, timeout_seconds=0.01).execute(sample_problem_ru)
    assert result.category == Category.TECHNICAL


@pytest.mark.asyncio
async def test_concurrent_classifications_are_independent(sample_problem_ru, sample_billing_ru):
    uc = ClassifyMessageUseCase()
    results = await asyncio.gather(*(uc.execute(t) for t in [sample_problem_ru, sample_billing_ru] * 5))
    assert {r.category for r in results[0::2]} == {Category.TECHNICAL}
    assert {r.category for r in results[1::2]} == {Category.BILLING}
