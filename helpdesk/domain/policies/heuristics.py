"""HeuristicsPolicy — deterministic classifier used when no model is available.

Pipeline, in fixed order:
  1. independent problem detectors (``detect_problem_signals``)
  2. category    — CATEGORY_TABLE, first match wins
  3. sentiment   — SENTIMENT_TABLE
  4. urgency     — URGENCY_TABLE
  5. intent      — fast-path intent if any, else INTENT_TABLE
  6. needs_response
  7. summary (first 100 chars)
  8. entities (always empty here)

Every decision table is an ordered tuple of ``(predicate, outcome)`` pairs so
the priority order can be read and tested on its own.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Callable

from helpdesk.domain.entities.classification import ClassificationResult, summarize
from helpdesk.domain.policies.simple_intent import SimpleIntent, detect_simple_intent
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG, EN, RU, UZ_CYRILLIC, UZ_LATIN
from helpdesk.domain.value_objects.enums import (
    NO_RESPONSE_INTENTS,
    RESPONSE_INTENTS,
    Category,
    Intent,
    Sentiment,
)
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog, normalize_text


@dataclass(frozen=True)
class ProblemSignals:
    """Outcome of the independent problem detectors."""

    ru_problem: bool = False
    uz_problem: bool = False
    has_lekin_problem: bool = False
    has_boshqa_problem: bool = False
    has_error_message: bool = False
    en_problem: bool = False
    is_billing_problem: bool = False
    is_onboarding_request: bool = False
    is_media_problem: bool = False
    is_question_complaint: bool = False

    @property
    def is_problem(self) -> bool:
        return any(astuple(self))

    @property
    def has_problem_vocabulary(self) -> bool:
        return self.ru_problem or self.uz_problem or self.en_problem

    def fired(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


def detect_problem_signals(text: str, catalog: PatternCatalog = DEFAULT_CATALOG) -> ProblemSignals:
    """Run every problem detector against *text* (normalized here)."""
    t = normalize_text(text)
    business = catalog.matches("business_context", t)

    return ProblemSignals(
        ru_problem=catalog.matches("problem", t, language=RU),
        uz_problem=catalog.matches("problem", t, language=(UZ_LATIN, UZ_CYRILLIC)),
        has_lekin_problem=business and catalog.matches("contrast", t),
        has_boshqa_problem=business and catalog.matches("different", t),
        has_error_message=catalog.matches("error_tokens", t),
        en_problem=catalog.matches("problem", t, language=EN),
        is_billing_problem=(
            catalog.matches("billing_discrepancy", t)
            or catalog.matches("billing_complaint", t)
            or catalog.matches("billing_amount_question", t)
            or catalog.matches("billing_uz", t)
        ),
        is_onboarding_request=catalog.matches("onboarding", t),
        is_media_problem=catalog.matches("media", t),
        is_question_complaint=(
            catalog.matches("question_opener", t)
            and (business or catalog.matches("numeric_context", t))
        ),
    )


@dataclass(frozen=True)
class _Context:
    """Everything a decision-table predicate may look at."""

    raw: str
    text: str
    catalog: PatternCatalog
    signals: ProblemSignals
    sentiment: Sentiment | None = None

    def has(self, group: str) -> bool:
        return self.catalog.matches(group, self.text)


Predicate = Callable[[_Context], bool]


def _billing_or_question_complaint(c: _Context) -> bool:
    return c.signals.is_billing_problem or c.signals.is_question_complaint


def _urgency_vocabulary_score(c: _Context) -> int:
    rules = c.catalog.matching_rules("urgency", c.text)
    return max((r.urgency if r.urgency is not None else 4) for r in rules)


# ─── Decision tables ───

CATEGORY_TABLE: tuple[tuple[Predicate, Category], ...] = (
    (lambda c: c.signals.is_onboarding_request, Category.ONBOARDING),
    (lambda c: c.signals.is_billing_problem or c.has("category_billing"), Category.BILLING),
    (lambda c: c.has("complaint"), Category.COMPLAINT),
    (
        lambda c: c.has("category_technical")
        or c.signals.has_error_message
        or c.signals.has_problem_vocabulary,
        Category.TECHNICAL,
    ),
    (lambda c: c.has("category_integration"), Category.INTEGRATION),
    (lambda c: c.has("category_feature_request"), Category.FEATURE_REQUEST),
    (lambda c: c.has("category_order"), Category.ORDER),
    (lambda c: c.has("category_delivery"), Category.DELIVERY),
    # Branch / region issues are handled by the technical team
    (lambda c: c.has("category_branch"), Category.TECHNICAL),
    (lambda c: c.has("category_menu"), Category.MENU),
    (lambda c: c.has("category_app"), Category.APP),
    (lambda c: c.has("category_question"), Category.QUESTION),
    (lambda c: c.has("category_feedback"), Category.FEEDBACK),
)

SENTIMENT_TABLE: tuple[tuple[Predicate, Sentiment], ...] = (
    (lambda c: c.has("positive"), Sentiment.POSITIVE),
    (lambda c: c.has("frustration") or c.has("complaint"), Sentiment.FRUSTRATED),
    (
        lambda c: c.signals.has_problem_vocabulary
        or c.has("negative")
        or _billing_or_question_complaint(c),
        Sentiment.NEGATIVE,
    ),
)

# Outcomes are either a fixed score or a function of the context
URGENCY_TABLE: tuple[tuple[Predicate, int | Callable[[_Context], int]], ...] = (
    (lambda c: c.has("urgency"), _urgency_vocabulary_score),
    (lambda c: c.signals.is_problem and c.sentiment == Sentiment.FRUSTRATED, 3),
    (lambda c: c.signals.is_onboarding_request, 3),
    (_billing_or_question_complaint, 3),
    (lambda c: c.signals.is_problem, 2),
    (lambda c: "?" in c.raw, 1),
    (lambda c: c.sentiment == Sentiment.POSITIVE, 0),
)

INTENT_TABLE: tuple[tuple[Predicate, Intent], ...] = (
    (_billing_or_question_complaint, Intent.COMPLAINT),
    (lambda c: c.signals.is_problem, Intent.REPORT_PROBLEM),
    (lambda c: c.has("question_words"), Intent.ASK_QUESTION),
    (lambda c: c.has("desire"), Intent.REQUEST_FEATURE),
    (lambda c: c.has("complaint"), Intent.COMPLAINT),
)

DEFAULT_CATEGORY = Category.GENERAL
DEFAULT_SENTIMENT = Sentiment.NEUTRAL
DEFAULT_URGENCY = 1
DEFAULT_INTENT = Intent.INFORMATION


def _first_match(table, ctx: _Context, default):
    for predicate, outcome in table:
        if predicate(ctx):
            return outcome(ctx) if callable(outcome) else outcome
    return default


def ends_with_question(text: str | None) -> bool:
    return (text or "").rstrip().endswith("?")


def needs_response_for(intent: Intent, is_problem: bool, text: str) -> bool:
    """Whether a human or automated reply is expected.

    Conversation-closing intents never need a reply unless the message is
    itself a question.
    """
    if intent in NO_RESPONSE_INTENTS:
        return ends_with_question(text)
    return (
        is_problem
        or intent in RESPONSE_INTENTS
        or intent.is_faq
        or ends_with_question(text)
    )


def analyze_without_ai(text: str, catalog: PatternCatalog = DEFAULT_CATALOG) -> ClassificationResult:
    """Classify *text* with the pattern catalog only. Pure and deterministic."""
    raw = text or ""
    simple: SimpleIntent | None = detect_simple_intent(raw, catalog)
    signals = detect_problem_signals(raw, catalog)
    ctx = _Context(raw=raw, text=normalize_text(raw), catalog=catalog, signals=signals)

    category = _first_match(CATEGORY_TABLE, ctx, DEFAULT_CATEGORY)
    sentiment = _first_match(SENTIMENT_TABLE, ctx, DEFAULT_SENTIMENT)

    ctx = _Context(
        raw=ctx.raw, text=ctx.text, catalog=catalog, signals=signals, sentiment=sentiment
    )
    urgency = _first_match(URGENCY_TABLE, ctx, DEFAULT_URGENCY)

    if simple is not None:
        intent = simple.intent
        auto_reply = simple.auto_reply_allowed
    else:
        intent = _first_match(INTENT_TABLE, ctx, DEFAULT_INTENT)
        auto_reply = False

    is_problem = signals.is_problem
    if is_problem:
        # A reported problem is never answered by a template
        auto_reply = False

    return ClassificationResult(
        category=category,
        sentiment=sentiment,
        intent=intent,
        urgency=urgency,
        is_problem=is_problem,
        needs_response=needs_response_for(intent, is_problem, raw),
        auto_reply_allowed=auto_reply,
        summary=summarize(raw),
        entities={},
    )
