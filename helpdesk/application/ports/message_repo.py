"""Port interface for message persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from helpdesk.domain.entities.message import Message


class MessageRepository(ABC):
    @abstractmethod
    async def save(self, message: Message) -> Message:
        ...

    @abstractmethod
    async def get_by_id(self, message_id: int) -> Message | None:
        ...

    @abstractmethod
    async def update_classification(self, message: Message) -> None:
        """Persist the classification columns of an already saved message."""
        ...

    @abstractmethod
    async def count_recent_problems(
        self, channel_id: str, sender_id: str | None, since: datetime, exclude_id: int | None = None
    ) -> int:
        """Problem messages from the same sender in the channel since *since*."""
        ...

    @abstractmethod
    async def has_staff_message_since(self, channel_id: str, since: datetime) -> bool:
        ...

    @abstractmethod
    async def get_recent(self, limit: int = 200, from_clients_only: bool = True) -> list[Message]:
        ...
