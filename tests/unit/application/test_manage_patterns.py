"""Tests for the pattern override layer."""

import pytest

from conftest import FakePatternRepo
from helpdesk.application.use_cases.manage_patterns import ManagePatternsUseCase
from helpdesk.domain.policies.heuristics import analyze_without_ai
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.enums import Intent
from helpdesk.domain.value_objects.pattern_catalog import PatternRule


@pytest.mark.asyncio
async def test_no_overrides_returns_defaults():
    catalog = await ManagePatternsUseCase(FakePatternRepo()).load_catalog()
    assert catalog is DEFAULT_CATALOG


@pytest.mark.asyncio
async def test_store_failure_returns_defaults():
    repo = FakePatternRepo(error=RuntimeError("relation does not exist"))
    catalog = await ManagePatternsUseCase(repo).load_catalog()
    assert catalog is DEFAULT_CATALOG


@pytest.mark.asyncio
async def test_added_rule_changes_classification():
    uc = ManagePatternsUseCase(FakePatternRepo())
    await uc.save(
        PatternRule(group="greeting", name="custom_greeting", patterns=("хаюшки",), auto_reply=True)
    )

    catalog = await uc.load_catalog()

    assert catalog.source == "database"
    assert analyze_without_ai("Хаюшки!", catalog).intent == Intent.GREETING
    assert analyze_without_ai("Хаюшки!").intent != Intent.GREETING


@pytest.mark.asyncio
async def test_empty_override_disables_builtin_rule():
    uc = ManagePatternsUseCase(FakePatternRepo())
    await uc.save(PatternRule(group="greeting", name="en_greeting", patterns=()))

    catalog = await uc.load_catalog()

    assert analyze_without_ai("hello", catalog).intent != Intent.GREETING
    assert analyze_without_ai("Здравствуйте", catalog).intent == Intent.GREETING


@pytest.mark.asyncio
async def test_remove():
    repo = FakePatternRepo([PatternRule(group="greeting", name="custom", patterns=("хай",))])
    uc = ManagePatternsUseCase(repo)

    assert await uc.remove("greeting", "custom")
    assert not await uc.remove("greeting", "custom")
    assert await uc.list_overrides() == []
