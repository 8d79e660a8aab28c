"""Port interface for channel state."""

from abc import ABC, abstractmethod
from datetime import datetime

from helpdesk.domain.entities.channel import Channel
from helpdesk.domain.value_objects.enums import ChannelPriority


class ChannelRepository(ABC):
    @abstractmethod
    async def get_or_create(self, channel_id: str, name: str | None = None) -> Channel:
        ...

    @abstractmethod
    async def set_priority(self, channel_id: str, priority: ChannelPriority) -> None:
        ...

    @abstractmethod
    async def set_awaiting_reply(self, channel_id: str, awaiting: bool) -> bool:
        """Set the awaiting-reply flag. Returns True when the stored value changed."""
        ...

    @abstractmethod
    async def record_activity(self, channel_id: str, at: datetime, from_staff: bool) -> None:
        """Update the last client / last staff message timestamps."""
        ...
