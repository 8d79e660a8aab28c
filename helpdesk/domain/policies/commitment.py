"""CommitmentPolicy — spot promises in staff messages.

Concrete phrases ("до завтра", "через 2 часа", "к 15:30") give a deadline
relative to the message time; clock times are read in the deployment
timezone when one is given. Vague promises, callbacks and action promises
without a time get AUTO_DEADLINE.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from helpdesk.domain.value_objects.enums import CommitmentKind
from helpdesk.domain.value_objects.pattern_catalog import normalize_text

AUTO_DEADLINE = timedelta(hours=4)


@dataclass(frozen=True)
class DetectedCommitment:
    kind: CommitmentKind
    phrase: str
    due_at: datetime
    is_vague: bool


def _hours(n: int) -> timedelta:
    return timedelta(hours=n)


def _minutes(n: int) -> timedelta:
    return timedelta(minutes=n)


# (pattern, fixed delta or function of the first captured number)
_CONCRETE_PATTERNS: tuple[tuple[re.Pattern, object], ...] = tuple(
    (re.compile(p, re.IGNORECASE), delta)
    for p, delta in (
        (r"завтра\s+утром|ertaga\s+ertalab|tomorrow\s+morning", _hours(18)),
        (r"до\s+завтра|\bзавтра\b|\bertaga\b|\bэртага\b|\btomorrow\b", _hours(24)),
        (r"через\s+полчаса|yarim\s+soatda|half\s+an\s+hour", _minutes(30)),
        (r"через\s+(\d+)\s*час|(\d+)\s+soatda|in\s+(\d+)\s+hours?", _hours),
        (r"через\s+(\d+)\s*мин|(\d+)\s+daqiqada|in\s+(\d+)\s+min", _minutes),
        (r"через\s+час|bir\s+soatda|in\s+an\s+hour", _hours(1)),
        (r"до\s+конца\s+дня|\bсегодня\b|\bbugun\b|\bбугун\b|\btoday\b|end\s+of\s+(the\s+)?day", _hours(8)),
        (r"на\s+этой\s+неделе|shu\s+hafta|this\s+week", timedelta(days=7)),
        (r"\b(5|10|15)\s*минут", _minutes),
    )
)

_AT_TIME_RE = re.compile(r"(?:\bк|\bdo|\bby|soat)\s+(\d{1,2})[:.](\d{2})", re.IGNORECASE)

_VAGUE_RE = re.compile(
    r"посмотрим|разберемся|решим|сделаем|минуточку|\bсейчас\b|проверю|уточню|узнаю|постараюсь|попробую"
    r"|ko'rib\s+chiqamiz|tekshiramiz|hal\s+qilamiz|hozir|кўриб\s+чиқамиз|текширамиз|ҳозир"
    r"|let\s+me\s+check|we'?ll\s+(look|check)|will\s+check",
    re.IGNORECASE,
)
_CALLBACK_RE = re.compile(
    r"перезвоню|напишу|отпишусь|свяжусь|дам\s+знать"
    r"|qo'ng'iroq\s+qilaman|yozaman|хабар\s+бераман|xabar\s+beraman"
    r"|will\s+call|get\s+back\s+to\s+you|let\s+you\s+know",
    re.IGNORECASE,
)
_ACTION_RE = re.compile(
    r"отправлю|скину|пришлю|подключу|настрою|исправлю|поправлю"
    r"|yuboraman|tuzataman|ulab\s+beraman|юбораман|тузатаман"
    r"|will\s+(send|fix|set\s+up|connect)",
    re.IGNORECASE,
)


def _concrete_deadline(text: str, now: datetime, tz: tzinfo | None) -> tuple[str, datetime] | None:
    at = _AT_TIME_RE.search(text)
    if at:
        hour, minute = int(at.group(1)), int(at.group(2))
        if hour < 24 and minute < 60:
            local = now.astimezone(tz) if tz is not None and now.tzinfo is not None else now
            due = local.replace(hour=hour, minute=minute, second=0, microsecond=0)
            if due <= local:
                due += timedelta(days=1)
            if now.tzinfo is not None:
                due = due.astimezone(now.tzinfo)
            return at.group(0), due

    for pattern, delta in _CONCRETE_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        if callable(delta):
            number = next((g for g in m.groups() if g and g.isdigit()), None)
            if number is None:
                continue
            return m.group(0), now + delta(int(number))
        return m.group(0), now + delta
    return None


def detect_commitment(text: str, now: datetime, tz: tzinfo | None = None) -> DetectedCommitment | None:
    """Return the first promise found in *text*, or None.

    *tz* is the zone staff mean when they name a clock time; *now* is usually
    a UTC timestamp and the returned deadline keeps its zone.
    """
    t = normalize_text(text)
    if not t.strip():
        return None

    concrete = _concrete_deadline(t, now, tz)
    if concrete is not None:
        phrase, due_at = concrete
        return DetectedCommitment(
            kind=CommitmentKind.CONCRETE, phrase=phrase, due_at=due_at, is_vague=False
        )

    for kind, pattern in (
        (CommitmentKind.CALLBACK, _CALLBACK_RE),
        (CommitmentKind.ACTION, _ACTION_RE),
        (CommitmentKind.VAGUE, _VAGUE_RE),
    ):
        m = pattern.search(t)
        if m:
            return DetectedCommitment(
                kind=kind, phrase=m.group(0), due_at=now + AUTO_DEADLINE, is_vague=True
            )
    return None
