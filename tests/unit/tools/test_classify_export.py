"""Tests for the offline CSV classification tool."""

import pytest

from helpdesk.domain.entities.message import Message
from helpdesk.domain.value_objects.enums import SenderRole
from helpdesk.tools.classify_export import classify_export


def _messages(*texts, role=SenderRole.CLIENT):
    return [Message(id=None, channel_id="csv-import", text=t, sender_role=role) for t in texts]


@pytest.mark.asyncio
async def test_classifies_client_rows(sample_billing_ru):
    rows = await classify_export(_messages(sample_billing_ru, "Rahmat"))

    assert len(rows) == 2
    assert rows[0]["category"] == "billing"
    assert rows[0]["language"] == "ru"
    assert rows[0]["is_problem"] is True
    assert rows[1]["intent"] == "gratitude"


@pytest.mark.asyncio
async def test_staff_rows_are_skipped():
    rows = await classify_export(_messages("Проверим и напишем", role=SenderRole.SUPPORT))
    assert rows == []


@pytest.mark.asyncio
async def test_only_problems(sample_problem_ru):
    rows = await classify_export(
        _messages(sample_problem_ru, "Как добавить новый товар в меню?"), only_problems=True
    )
    assert [r["text"] for r in rows] == [sample_problem_ru]
