"""UrgencyBoostPolicy — raise urgency from conversation history.

Rules are additive:
  +1  the sender already reported >= 2 problems in this channel within 48h
  +2  the last staff reply is older than 24h (+1 if older than 4h)
  +1  negative or frustrated sentiment
The result is clamped to 5; reaching 3 marks the message as a problem.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta

from helpdesk.domain.entities.classification import MAX_URGENCY, ClassificationResult
from helpdesk.domain.value_objects.enums import AUTO_REPLY_INTENTS, NO_RESPONSE_INTENTS, Sentiment

REPEAT_WINDOW = timedelta(hours=48)
REPEAT_THRESHOLD = 2
STALE_REPLY = timedelta(hours=24)
SLOW_REPLY = timedelta(hours=4)
PROBLEM_URGENCY = 3

# Fixed-form messages (greetings, thanks, FAQ) keep their template urgency
UNBOOSTED_INTENTS = NO_RESPONSE_INTENTS | AUTO_REPLY_INTENTS


@dataclass(frozen=True)
class UrgencyContext:
    now: datetime
    recent_problem_count: int = 0
    last_staff_reply_at: datetime | None = None


def urgency_boost(result: ClassificationResult, ctx: UrgencyContext) -> int:
    boost = 0
    if ctx.recent_problem_count >= REPEAT_THRESHOLD:
        boost += 1
    if ctx.last_staff_reply_at is not None:
        silence = ctx.now - ctx.last_staff_reply_at
        if silence > STALE_REPLY:
            boost += 2
        elif silence > SLOW_REPLY:
            boost += 1
    if result.sentiment in (Sentiment.NEGATIVE, Sentiment.FRUSTRATED):
        boost += 1
    return boost


def boost_urgency(result: ClassificationResult, ctx: UrgencyContext) -> ClassificationResult:
    """Return *result* with history-adjusted urgency.

    Conversation-closing and fixed-form messages ("ok", "rahmat",
    "Здравствуйте!", pricing questions) are left untouched.
    """
    if result.intent in UNBOOSTED_INTENTS:
        return result

    boost = urgency_boost(result, ctx)
    if boost == 0:
        return result

    urgency = min(MAX_URGENCY, result.urgency + boost)
    is_problem = result.is_problem or urgency >= PROBLEM_URGENCY
    return dataclasses.replace(
        result,
        urgency=urgency,
        is_problem=is_problem,
        needs_response=result.needs_response or is_problem,
        auto_reply_allowed=result.auto_reply_allowed and not is_problem,
    )
