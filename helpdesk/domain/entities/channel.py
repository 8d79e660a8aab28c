"""Channel entity — a Telegram group or chat that owns messages."""

from dataclasses import dataclass
from datetime import datetime

from helpdesk.domain.value_objects.enums import ChannelPriority


@dataclass
class Channel:
    id: str
    name: str | None = None
    priority: ChannelPriority = ChannelPriority.NORMAL
    awaiting_reply: bool = False
    last_client_message_at: datetime | None = None
    last_team_message_at: datetime | None = None

    def needs_attention(self) -> bool:
        return self.awaiting_reply or self.priority.rank >= ChannelPriority.HIGH.rank
