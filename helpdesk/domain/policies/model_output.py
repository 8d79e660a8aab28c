"""Validation of classifier-model output.

The model is untrusted: its reply is scanned for the first ``{...}`` block and
every field is clamped or defaulted individually instead of rejecting the
whole answer.
"""

from __future__ import annotations

import json
import re

from helpdesk.domain.entities.classification import ClassificationResult, summarize
from helpdesk.domain.policies.heuristics import ends_with_question
from helpdesk.domain.value_objects.enums import (
    AUTO_REPLY_INTENTS,
    NO_RESPONSE_INTENTS,
    Category,
    Intent,
    Sentiment,
)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

CATEGORY_MAP: dict[str, Category] = {c.value: c for c in Category}
SENTIMENT_MAP: dict[str, Sentiment] = {s.value: s for s in Sentiment}
INTENT_MAP: dict[str, Intent] = {i.value: i for i in Intent}


class ModelOutputError(ValueError):
    """The model reply does not contain a usable JSON object."""


def extract_json_object(raw: str | None) -> dict:
    """Parse the first ``{...}`` block of *raw* (prose and fences are ignored).

    Raises:
        ModelOutputError: no block found, invalid JSON, or not an object.
    """
    match = _JSON_OBJECT_RE.search(raw or "")
    if match is None:
        raise ModelOutputError("no JSON object in model reply")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ModelOutputError(f"invalid JSON in model reply: {e}") from e
    if not isinstance(data, dict):
        raise ModelOutputError("model reply JSON is not an object")
    return data


def _as_bool(value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return default


def _as_urgency(value) -> int:
    if isinstance(value, bool):
        return 1
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1


def _field(payload: dict, camel: str, snake: str):
    return payload[camel] if camel in payload else payload.get(snake)


def _lookup(mapping: dict, value, default):
    if not isinstance(value, str):
        return default
    return mapping.get(value.strip().lower(), default)


def sanitize_model_output(payload: dict, text: str) -> ClassificationResult:
    """Turn a parsed model reply into a valid ClassificationResult.

    Unknown category / sentiment / intent values are replaced by
    general / neutral / information. Urgency is coerced to int and clamped.
    """
    category = _lookup(CATEGORY_MAP, payload.get("category"), Category.GENERAL)
    sentiment = _lookup(SENTIMENT_MAP, payload.get("sentiment"), Sentiment.NEUTRAL)
    intent = _lookup(INTENT_MAP, payload.get("intent"), Intent.INFORMATION)

    is_problem = _as_bool(_field(payload, "isProblem", "is_problem"), False)
    auto_reply = _as_bool(
        _field(payload, "autoReplyAllowed", "auto_reply_allowed"),
        intent in AUTO_REPLY_INTENTS,
    )
    needs_response = _field(payload, "needsResponse", "needs_response") is not False

    if intent in NO_RESPONSE_INTENTS and not ends_with_question(text):
        needs_response = False
    if is_problem:
        auto_reply = False

    summary = payload.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = summarize(text)

    raw_entities = payload.get("entities")
    entities = {}
    if isinstance(raw_entities, dict):
        entities = {
            str(k): v for k, v in raw_entities.items() if isinstance(k, str) and isinstance(v, str)
        }

    return ClassificationResult(
        category=category,
        sentiment=sentiment,
        intent=intent,
        urgency=_as_urgency(payload.get("urgency", 1)),
        is_problem=is_problem,
        needs_response=needs_response,
        auto_reply_allowed=auto_reply,
        summary=summary,
        entities=entities,
    )
