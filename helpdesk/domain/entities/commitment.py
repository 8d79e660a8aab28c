"""Commitment entity — a promise made by staff, tracked as a reminder."""

from dataclasses import dataclass
from datetime import datetime

from helpdesk.domain.value_objects.enums import CommitmentKind


@dataclass
class Commitment:
    id: int | None
    channel_id: str
    message_id: int | None
    kind: CommitmentKind
    phrase: str
    due_at: datetime
    is_vague: bool
    sender_name: str | None = None
    status: str = "pending"
