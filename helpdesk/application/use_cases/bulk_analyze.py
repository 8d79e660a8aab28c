"""BulkAnalyzeUseCase — vocabulary mining over recent client messages."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.domain.policies.heuristics import analyze_without_ai, detect_problem_signals
from helpdesk.domain.policies.language import detect_language
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.enums import NO_RESPONSE_INTENTS, Intent, Sentiment
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog

logger = logging.getLogger(__name__)

MAX_SAMPLES = 5


@dataclass
class BulkAnalysisReport:
    total: int = 0
    problems: int = 0
    questions: int = 0
    resolved: int = 0
    by_language: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    detectors: dict[str, int] = field(default_factory=dict)
    samples: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "problems": self.problems,
            "questions": self.questions,
            "resolved": self.resolved,
            "by_language": self.by_language,
            "by_category": self.by_category,
            "detectors": self.detectors,
            "samples": self.samples,
        }


def analyze_batch(texts: Iterable[str], catalog: PatternCatalog = DEFAULT_CATALOG) -> BulkAnalysisReport:
    """Aggregate language, detector and outcome counts for *texts*."""
    report = BulkAnalysisReport()
    languages: Counter = Counter()
    categories: Counter = Counter()
    detectors: Counter = Counter()

    for text in texts:
        if not text or not text.strip():
            continue
        report.total += 1
        languages[detect_language(text).value] += 1

        signals = detect_problem_signals(text, catalog)
        for name in signals.fired():
            detectors[name] += 1
            bucket = report.samples.setdefault(name, [])
            if len(bucket) < MAX_SAMPLES:
                bucket.append(text[:200])

        result = analyze_without_ai(text, catalog)
        categories[result.category.value] += 1
        if result.is_problem:
            report.problems += 1
        if result.intent == Intent.ASK_QUESTION:
            report.questions += 1
        if result.intent in NO_RESPONSE_INTENTS or result.sentiment == Sentiment.POSITIVE:
            report.resolved += 1

    report.by_language = dict(languages.most_common())
    report.by_category = dict(categories.most_common())
    report.detectors = dict(detectors.most_common())
    return report


class BulkAnalyzeUseCase:
    def __init__(self, message_repo: MessageRepository, catalog: PatternCatalog = DEFAULT_CATALOG):
        self._messages = message_repo
        self._catalog = catalog

    async def execute(self, limit: int = 500) -> BulkAnalysisReport:
        messages = await self._messages.get_recent(limit=limit, from_clients_only=True)
        report = analyze_batch((m.text for m in messages), self._catalog)
        logger.info(
            "Bulk analysis: %d messages, %d problems, %d questions",
            report.total, report.problems, report.questions,
        )
        return report
