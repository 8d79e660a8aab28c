"""Message entity — one inbound or outbound chat message."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.value_objects.enums import Category, Intent, SenderRole, Sentiment


@dataclass
class Message:
    id: int | None
    channel_id: str
    text: str
    sender_role: SenderRole = SenderRole.CLIENT
    sender_id: str | None = None
    sender_name: str | None = None
    created_at: datetime | None = None

    # Classification projection (filled after analysis)
    category: Category | None = None
    sentiment: Sentiment | None = None
    intent: Intent | None = None
    urgency: int | None = None
    is_problem: bool = False
    needs_response: bool = False
    auto_reply_candidate: bool = False
    summary: str | None = None
    entities: dict[str, str] = field(default_factory=dict)
    case_id: int | None = None

    @property
    def is_from_client(self) -> bool:
        return not self.sender_role.is_staff

    def apply_classification(self, result: ClassificationResult, auto_reply_candidate: bool) -> None:
        self.category = result.category
        self.sentiment = result.sentiment
        self.intent = result.intent
        self.urgency = result.urgency
        self.is_problem = result.is_problem
        self.needs_response = result.needs_response
        self.auto_reply_candidate = auto_reply_candidate
        self.summary = result.summary
        self.entities = dict(result.entities)
