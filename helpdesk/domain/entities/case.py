"""Case entity — a trackable support issue grouping related messages."""

from dataclasses import dataclass
from datetime import datetime

from helpdesk.domain.value_objects.enums import Category, CasePriority, CaseSeverity, CaseStatus


@dataclass
class Case:
    id: int | None
    channel_id: str
    title: str
    category: Category
    priority: CasePriority
    severity: CaseSeverity
    status: CaseStatus = CaseStatus.DETECTED
    description: str | None = None
    source_message_id: int | None = None
    ticket_number: int | None = None
    messages_count: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_open(self) -> bool:
        return not self.status.is_terminal
