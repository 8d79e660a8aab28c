"""Port interface for the request transaction."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator


class UnitOfWork(ABC):
    @abstractmethod
    def savepoint(self) -> AsyncContextManager[None]:
        """Scope whose writes are undone if it raises.

        The enclosing transaction stays usable, so later steps and the final
        commit still run after a failed best-effort step.
        """
        ...


class NullUnitOfWork(UnitOfWork):
    """For callers without a transactional store (CLI, in-memory tests)."""

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        yield
