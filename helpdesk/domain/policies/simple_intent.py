"""SimpleIntentPolicy — fast path for short fixed-form messages.

"ok", "rahmat", "Здравствуйте!" and the like are matched as a whole and
never reach the multi-signal heuristics as problems.
"""

from __future__ import annotations

from dataclasses import dataclass

from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.enums import Intent
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog, normalize_text

# Priority order: first group with a whole-text match wins
SIMPLE_INTENT_GROUPS: tuple[tuple[str, Intent], ...] = (
    ("greeting", Intent.GREETING),
    ("gratitude", Intent.GRATITUDE),
    ("closing", Intent.CLOSING),
    ("confirmation", Intent.RESPONSE),
    ("faq_pricing", Intent.FAQ_PRICING),
    ("faq_hours", Intent.FAQ_HOURS),
    ("faq_contacts", Intent.FAQ_CONTACTS),
)


@dataclass(frozen=True)
class SimpleIntent:
    intent: Intent
    auto_reply_allowed: bool
    rule: str


def detect_simple_intent(
    text: str, catalog: PatternCatalog = DEFAULT_CATALOG
) -> SimpleIntent | None:
    """Return the fixed-form intent of *text*, or None when the full pipeline is needed."""
    normalized = normalize_text(text).strip()
    if not normalized:
        return None

    for group, intent in SIMPLE_INTENT_GROUPS:
        rule = catalog.first_full_match(group, normalized)
        if rule is not None:
            return SimpleIntent(intent=intent, auto_reply_allowed=rule.auto_reply, rule=rule.key)
    return None
