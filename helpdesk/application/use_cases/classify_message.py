"""ClassifyMessageUseCase — fast path, optional model call, heuristic fallback."""

from __future__ import annotations

import asyncio
import logging

from helpdesk.application.ports.llm_port import LLMPort
from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.policies.heuristics import analyze_without_ai
from helpdesk.domain.policies.model_output import sanitize_model_output
from helpdesk.domain.policies.simple_intent import detect_simple_intent
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 8.0


class ClassifyMessageUseCase:
    """Classify one message. Never raises: every failure degrades to heuristics."""

    def __init__(
        self,
        llm: LLMPort | None = None,
        catalog: PatternCatalog = DEFAULT_CATALOG,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._llm = llm
        self._catalog = catalog
        self._timeout = timeout_seconds

    @property
    def catalog(self) -> PatternCatalog:
        return self._catalog

    async def execute(self, text: str) -> ClassificationResult:
        if detect_simple_intent(text, self._catalog) is not None:
            return analyze_without_ai(text, self._catalog)

        if self._llm is None or not self._llm.is_configured:
            return analyze_without_ai(text, self._catalog)

        try:
            payload = await asyncio.wait_for(self._llm.classify(text), timeout=self._timeout)
            if payload is not None:
                return sanitize_model_output(payload, text)
            logger.warning("Classifier returned no usable answer, using heuristics")
        except asyncio.TimeoutError:
            logger.warning("Classifier timed out after %.1fs, using heuristics", self._timeout)
        except Exception:
            logger.warning("Classifier call failed, using heuristics", exc_info=True)

        return analyze_without_ai(text, self._catalog)
