"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.adapters.llm.openai_adapter import OpenAIAdapter
from helpdesk.adapters.persistence.database import get_session
from helpdesk.adapters.persistence.repositories import (
    SqlCaseRepository,
    SqlChannelRepository,
    SqlCommitmentRepository,
    SqlMessageRepository,
    SqlPatternRepository,
    SqlUnitOfWork,
)
from helpdesk.application.locks import KeyedLock
from helpdesk.application.use_cases.analyze_message import AnalyzeMessageUseCase
from helpdesk.application.use_cases.bulk_analyze import BulkAnalyzeUseCase
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.application.use_cases.manage_patterns import ManagePatternsUseCase
from helpdesk.application.use_cases.open_ticket import TicketDecisionUseCase
from helpdesk.application.use_cases.process_message import ProcessMessageUseCase
from helpdesk.config import settings
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog

# Re-export session dependency
get_db_session = get_session

# Singletons shared by all requests of this worker
_llm_adapter = OpenAIAdapter()
_case_locks = KeyedLock()


def get_catalog(request: Request) -> PatternCatalog:
    """Active pattern catalog, loaded at startup and replaced on override edits."""
    return getattr(request.app.state, "catalog", DEFAULT_CATALOG)


def get_message_repo(session: AsyncSession = Depends(get_session)) -> SqlMessageRepository:
    return SqlMessageRepository(session)


def get_channel_repo(session: AsyncSession = Depends(get_session)) -> SqlChannelRepository:
    return SqlChannelRepository(session)


def get_case_repo(session: AsyncSession = Depends(get_session)) -> SqlCaseRepository:
    return SqlCaseRepository(session)


def get_classifier(catalog: PatternCatalog = Depends(get_catalog)) -> ClassifyMessageUseCase:
    return ClassifyMessageUseCase(
        llm=_llm_adapter,
        catalog=catalog,
        timeout_seconds=settings.openai_timeout_seconds,
    )


def get_analyze_message_uc(
    session: AsyncSession = Depends(get_session),
    classifier: ClassifyMessageUseCase = Depends(get_classifier),
) -> AnalyzeMessageUseCase:
    return AnalyzeMessageUseCase(
        classifier=classifier,
        message_repo=SqlMessageRepository(session),
        channel_repo=SqlChannelRepository(session),
        uow=SqlUnitOfWork(session),
    )


def get_process_message_uc(
    session: AsyncSession = Depends(get_session),
    classifier: ClassifyMessageUseCase = Depends(get_classifier),
) -> ProcessMessageUseCase:
    message_repo = SqlMessageRepository(session)
    uow = SqlUnitOfWork(session)
    ticket_decision = TicketDecisionUseCase(
        case_repo=SqlCaseRepository(session),
        message_repo=message_repo,
        locks=_case_locks,
        grouping_window=timedelta(minutes=settings.case_grouping_window_minutes),
        uow=uow,
    )
    return ProcessMessageUseCase(
        classifier=classifier,
        ticket_decision=ticket_decision,
        message_repo=message_repo,
        channel_repo=SqlChannelRepository(session),
        commitment_repo=SqlCommitmentRepository(session),
        auto_create_cases=settings.auto_create_cases,
        urgency_boost_enabled=settings.urgency_boost_enabled,
        timezone=settings.timezone,
        uow=uow,
    )


def get_bulk_analyze_uc(
    session: AsyncSession = Depends(get_session),
    catalog: PatternCatalog = Depends(get_catalog),
) -> BulkAnalyzeUseCase:
    return BulkAnalyzeUseCase(message_repo=SqlMessageRepository(session), catalog=catalog)


def get_manage_patterns_uc(session: AsyncSession = Depends(get_session)) -> ManagePatternsUseCase:
    return ManagePatternsUseCase(pattern_repo=SqlPatternRepository(session))
