"""HTTP tests for the API routers with in-memory dependencies."""

from types import SimpleNamespace

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from conftest import NOW, FakeCaseRepo, FakeChannelRepo, FakeCommitmentRepo, FakeMessageRepo, FakePatternRepo
from helpdesk.adapters.persistence.database import get_session
from helpdesk.application.locks import KeyedLock
from helpdesk.application.use_cases.analyze_message import AnalyzeMessageUseCase
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.application.use_cases.manage_patterns import ManagePatternsUseCase
from helpdesk.application.use_cases.open_ticket import TicketDecisionUseCase
from helpdesk.application.use_cases.process_message import ProcessMessageUseCase
from helpdesk.domain.entities.case import Case
from helpdesk.domain.value_objects.enums import CasePriority, CaseSeverity, Category
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog
from helpdesk.infrastructure.api.dependencies import (
    get_analyze_message_uc,
    get_case_repo,
    get_catalog,
    get_manage_patterns_uc,
    get_process_message_uc,
)
from helpdesk.main import create_app


class FakeSession:
    def __init__(self, fail=False):
        self.commits = 0
        self._fail = fail

    async def commit(self):
        self.commits += 1

    async def execute(self, statement):
        if self._fail:
            raise ConnectionRefusedError("connection refused")
        return SimpleNamespace(scalar=lambda: 1)


@pytest.fixture
def env():
    app = create_app()
    state = SimpleNamespace(
        app=app,
        session=FakeSession(),
        messages=FakeMessageRepo(),
        channels=FakeChannelRepo(),
        cases=FakeCaseRepo(),
        patterns=FakePatternRepo(),
    )

    async def _session():
        yield state.session

    def _analyze_uc(catalog: PatternCatalog = Depends(get_catalog)):
        return AnalyzeMessageUseCase(
            classifier=ClassifyMessageUseCase(llm=None, catalog=catalog),
            message_repo=state.messages,
            channel_repo=state.channels,
        )

    def _process_uc():
        return ProcessMessageUseCase(
            classifier=ClassifyMessageUseCase(llm=None),
            ticket_decision=TicketDecisionUseCase(
                case_repo=state.cases, message_repo=state.messages, locks=KeyedLock(), clock=lambda: NOW
            ),
            message_repo=state.messages,
            channel_repo=state.channels,
            commitment_repo=FakeCommitmentRepo(),
            clock=lambda: NOW,
        )

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_analyze_message_uc] = _analyze_uc
    app.dependency_overrides[get_process_message_uc] = _process_uc
    app.dependency_overrides[get_case_repo] = lambda: state.cases
    app.dependency_overrides[get_manage_patterns_uc] = lambda: ManagePatternsUseCase(state.patterns)
    state.client = TestClient(app)
    return state


def test_health(env):
    response = env.client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["patterns"] == "defaults"


def test_health_degraded(env):
    env.session = FakeSession(fail=True)
    data = env.client.get("/api/health").json()
    assert data["status"] == "degraded"
    assert data["database"].startswith("error")


def test_analyze_text(env, sample_billing_ru):
    response = env.client.get("/api/analyze", params={"text": sample_billing_ru})
    assert response.status_code == 200
    data = response.json()
    assert data["analysis"]["category"] == "billing"
    assert data["analysis"]["is_problem"] is True
    assert data["language"] == "ru"


def test_analyze_rejects_short_text(env):
    assert env.client.get("/api/analyze", params={"text": "ok"}).status_code == 422
    assert env.client.post("/api/analyze", json={"text": "  "}).status_code == 422


def test_analyze_with_channel_commits(env):
    response = env.client.post("/api/analyze", json={"text": "Katta rahmat", "channel_id": "chat-1"})
    assert response.status_code == 200
    assert response.json()["awaiting_reply_cleared"] is False
    assert env.session.commits == 0

    env.channels.channels["chat-1"].awaiting_reply = True
    response = env.client.post("/api/analyze", json={"text": "Katta rahmat", "channel_id": "chat-1"})
    assert response.json()["awaiting_reply_cleared"] is True
    assert env.session.commits == 1


def test_ingest_message_creates_case(env, sample_problem_ru):
    response = env.client.post(
        "/api/messages",
        json={"channel_id": "chat-1", "text": sample_problem_ru, "sender_id": "u-1"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message_id"] == 1
    assert data["ticket"]["action"] == "created"
    assert data["awaiting_reply"] is True
    assert data["errors"] == []
    assert env.session.commits == 1


def test_ingest_staff_message_reports_commitment(env):
    response = env.client.post(
        "/api/messages",
        json={"channel_id": "chat-1", "text": "Перезвоню через 2 часа", "sender_role": "support"},
    )
    data = response.json()
    assert data["commitment"]["kind"] == "concrete"
    assert data["ticket"] is None


def test_ingest_message_validation(env):
    response = env.client.post("/api/messages", json={"channel_id": "chat-1", "text": "hi", "sender_role": "bot"})
    assert response.status_code == 422


def test_ingest_message_failure_returns_500(env):
    class Broken:
        async def execute(self, message, channel_name=None):
            raise RuntimeError("pipeline exploded")

    env.app.dependency_overrides[get_process_message_uc] = lambda: Broken()
    response = env.client.post("/api/messages", json={"channel_id": "chat-1", "text": "Касса"})
    assert response.status_code == 500
    assert response.json()["detail"] == "pipeline exploded"


def test_cases(env):
    env.cases.cases[1] = Case(
        id=1, channel_id="chat-1", title="Касса", category=Category.BILLING,
        priority=CasePriority.MEDIUM, severity=CaseSeverity.NORMAL, ticket_number=1001, created_at=NOW,
    )

    listing = env.client.get("/api/cases").json()
    assert listing["total"] == 1
    assert listing["cases"][0]["ticket_number"] == 1001

    detail = env.client.get("/api/cases/1").json()
    assert detail["category"] == "billing"
    assert detail["status"] == "detected"

    assert env.client.get("/api/cases/2").status_code == 404


def test_pattern_override_reloads_catalog(env):
    assert env.client.get("/api/analyze", params={"text": "Хаюшки!"}).json()["analysis"]["intent"] != "greeting"

    response = env.client.post(
        "/api/patterns",
        json={"group": "greeting", "name": "custom", "patterns": ["хаюшки"], "auto_reply": True},
    )
    assert response.status_code == 200
    assert response.json()["source"] == "database"
    assert env.session.commits == 1
    assert env.client.get("/api/analyze", params={"text": "Хаюшки!"}).json()["analysis"]["intent"] == "greeting"

    overrides = env.client.get("/api/patterns").json()["overrides"]
    assert [o["name"] for o in overrides] == ["custom"]

    assert env.client.delete("/api/patterns/greeting/custom").status_code == 200
    assert env.client.get("/api/patterns").json()["source"] == "defaults"
    assert env.client.delete("/api/patterns/greeting/custom").status_code == 404


def test_invalid_pattern_rejected(env):
    response = env.client.post("/api/patterns", json={"group": "problem", "name": "broken", "patterns": ["(oops"]})
    assert response.status_code == 422
    assert env.patterns.rules == {}
