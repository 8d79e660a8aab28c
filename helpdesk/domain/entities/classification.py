"""ClassificationResult — structured outcome of classifying one message."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from helpdesk.domain.value_objects.enums import Category, Intent, Sentiment

MIN_URGENCY = 0
MAX_URGENCY = 5
SUMMARY_LENGTH = 100


def clamp_urgency(value: int) -> int:
    return max(MIN_URGENCY, min(MAX_URGENCY, int(value)))


def summarize(text: str) -> str:
    """First 100 characters of *text*, with ``...`` appended when truncated."""
    text = text or ""
    if len(text) <= SUMMARY_LENGTH:
        return text
    return text[:SUMMARY_LENGTH] + "..."


@dataclass(frozen=True)
class ClassificationResult:
    category: Category
    sentiment: Sentiment
    intent: Intent
    urgency: int
    is_problem: bool
    needs_response: bool
    auto_reply_allowed: bool
    summary: str
    entities: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "urgency", clamp_urgency(self.urgency))
        object.__setattr__(self, "entities", dict(self.entities))

    @classmethod
    def fallback(cls, text: str) -> "ClassificationResult":
        """Safe default used when nothing better is available."""
        return cls(
            category=Category.GENERAL,
            sentiment=Sentiment.NEUTRAL,
            intent=Intent.INFORMATION,
            urgency=1,
            is_problem=False,
            needs_response=True,
            auto_reply_allowed=False,
            summary=summarize(text),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        data["sentiment"] = self.sentiment.value
        data["intent"] = self.intent.value
        return data
