"""CSV value normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from helpdesk.domain.value_objects.enums import SenderRole


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases and drops everything except letters, digits and underscore
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name, flags=re.UNICODE)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


SENDER_ROLE_ALIASES: dict[str, SenderRole] = {
    "client": SenderRole.CLIENT,
    "customer": SenderRole.CLIENT,
    "клиент": SenderRole.CLIENT,
    "mijoz": SenderRole.CLIENT,
    "support": SenderRole.SUPPORT,
    "поддержка": SenderRole.SUPPORT,
    "саппорт": SenderRole.SUPPORT,
    "team": SenderRole.TEAM,
    "staff": SenderRole.TEAM,
    "команда": SenderRole.TEAM,
    "сотрудник": SenderRole.TEAM,
    "jamoa": SenderRole.TEAM,
    "agent": SenderRole.AGENT,
    "агент": SenderRole.AGENT,
    "operator": SenderRole.AGENT,
    "оператор": SenderRole.AGENT,
}


def parse_sender_role(raw: str | None) -> SenderRole:
    """Map free-form role labels to SenderRole; unknown or empty means client."""
    key = (clean_string(raw) or "").lower()
    return SENDER_ROLE_ALIASES.get(key, SenderRole.CLIENT)


_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%Y",
)


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse common export timestamp formats; naive values are taken as UTC."""
    value = clean_string(raw)
    if value is None:
        return None
    for fmt in _TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None
