"""Port interface for persisted pattern overrides."""

from abc import ABC, abstractmethod

from helpdesk.domain.value_objects.pattern_catalog import PatternRule


class PatternRepository(ABC):
    @abstractmethod
    async def list_active(self) -> list[PatternRule]:
        ...

    @abstractmethod
    async def upsert(self, rule: PatternRule) -> PatternRule:
        ...

    @abstractmethod
    async def deactivate(self, group: str, name: str) -> bool:
        """Returns False when no active override exists for (group, name)."""
        ...
