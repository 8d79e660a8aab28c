"""Port interface for staff commitments (reminders)."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities.commitment import Commitment


class CommitmentRepository(ABC):
    @abstractmethod
    async def save(self, commitment: Commitment) -> Commitment:
        ...

    @abstractmethod
    async def list_pending(self, channel_id: str | None = None) -> list[Commitment]:
        ...
