"""Port interface for case persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from helpdesk.domain.entities.case import Case
from helpdesk.domain.value_objects.enums import CaseStatus


class DuplicateCaseError(Exception):
    """A case for the same source message already exists."""

    def __init__(self, source_message_id: int | None, existing_case_id: int | None = None):
        super().__init__(f"Case for message {source_message_id} already exists")
        self.source_message_id = source_message_id
        self.existing_case_id = existing_case_id


class CaseRepository(ABC):
    @abstractmethod
    async def lock_channel(self, channel_id: str) -> None:
        """Serialize case decisions for *channel_id* until the transaction ends."""
        ...

    @abstractmethod
    async def get_by_id(self, case_id: int) -> Case | None:
        ...

    @abstractmethod
    async def get_by_source_message(self, message_id: int) -> Case | None:
        ...

    @abstractmethod
    async def find_recent_open_case(self, channel_id: str, since: datetime) -> Case | None:
        """Newest non-terminal case of the channel created at or after *since*."""
        ...

    @abstractmethod
    async def create(self, case: Case) -> Case:
        """Insert *case* and link its source message.

        Raises:
            DuplicateCaseError: a case for the same source message exists.
        """
        ...

    @abstractmethod
    async def attach_message(self, case_id: int, message_id: int) -> Case:
        ...

    @abstractmethod
    async def list_cases(
        self,
        status: CaseStatus | None = None,
        channel_id: str | None = None,
        limit: int = 100,
    ) -> list[Case]:
        ...
