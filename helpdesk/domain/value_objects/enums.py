"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Category(str, Enum):
    TECHNICAL = "technical"
    INTEGRATION = "integration"
    BILLING = "billing"
    COMPLAINT = "complaint"
    FEATURE_REQUEST = "feature_request"
    ORDER = "order"
    DELIVERY = "delivery"
    MENU = "menu"
    APP = "app"
    ONBOARDING = "onboarding"
    QUESTION = "question"
    FEEDBACK = "feedback"
    GENERAL = "general"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    FRUSTRATED = "frustrated"


class Intent(str, Enum):
    GREETING = "greeting"
    GRATITUDE = "gratitude"
    CLOSING = "closing"
    FAQ_PRICING = "faq_pricing"
    FAQ_HOURS = "faq_hours"
    FAQ_CONTACTS = "faq_contacts"
    ASK_QUESTION = "ask_question"
    REPORT_PROBLEM = "report_problem"
    REQUEST_FEATURE = "request_feature"
    COMPLAINT = "complaint"
    INFORMATION = "information"
    RESPONSE = "response"
    UNKNOWN = "unknown"

    @property
    def is_faq(self) -> bool:
        return self.value.startswith("faq_")


# Intents that are safe to answer with a template
AUTO_REPLY_INTENTS = frozenset({
    Intent.GREETING,
    Intent.GRATITUDE,
    Intent.CLOSING,
    Intent.FAQ_PRICING,
    Intent.FAQ_HOURS,
    Intent.FAQ_CONTACTS,
})

# Intents that close a conversational turn
NO_RESPONSE_INTENTS = frozenset({Intent.GRATITUDE, Intent.CLOSING, Intent.RESPONSE})

RESPONSE_INTENTS = frozenset({
    Intent.ASK_QUESTION,
    Intent.REQUEST_FEATURE,
    Intent.COMPLAINT,
    Intent.GREETING,
})


class Language(str, Enum):
    UZ_LATIN = "uz_latin"
    UZ_CYRILLIC = "uz_cyrillic"
    RU = "ru"
    EN = "en"
    MIXED = "mixed"


class SenderRole(str, Enum):
    CLIENT = "client"
    SUPPORT = "support"
    TEAM = "team"
    AGENT = "agent"

    @property
    def is_staff(self) -> bool:
        return self != SenderRole.CLIENT


class CasePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CaseSeverity(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class CaseStatus(str, Enum):
    DETECTED = "detected"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    BLOCKED = "blocked"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @property
    def is_terminal(self) -> bool:
        return self in (CaseStatus.RESOLVED, CaseStatus.CLOSED)


class ChannelPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _CHANNEL_PRIORITY_RANK[self]


_CHANNEL_PRIORITY_RANK = {
    ChannelPriority.LOW: 0,
    ChannelPriority.NORMAL: 1,
    ChannelPriority.HIGH: 2,
    ChannelPriority.URGENT: 3,
}


class CommitmentKind(str, Enum):
    CONCRETE = "concrete"
    VAGUE = "vague"
    CALLBACK = "callback"
    ACTION = "action"


class TicketAction(str, Enum):
    SKIPPED_EXISTING = "skipped_existing"
    GROUPED = "grouped"
    CREATED = "created"
    FAILED = "failed"
