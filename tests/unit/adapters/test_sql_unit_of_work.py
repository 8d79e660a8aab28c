"""Tests for SqlUnitOfWork savepoint scoping."""

import pytest

from helpdesk.adapters.persistence.repositories import SqlUnitOfWork


class _Nested:
    def __init__(self, log):
        self._log = log

    async def __aenter__(self):
        self._log.append("savepoint")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._log.append("rollback" if exc_type else "release")
        return False


class _Session:
    def __init__(self):
        self.log: list[str] = []

    def begin_nested(self):
        return _Nested(self.log)


@pytest.mark.asyncio
async def test_savepoint_released_on_success():
    session = _Session()
    async with SqlUnitOfWork(session).savepoint():
        pass
    assert session.log == ["savepoint", "release"]


@pytest.mark.asyncio
async def test_savepoint_rolled_back_and_error_propagates():
    session = _Session()
    with pytest.raises(RuntimeError):
        async with SqlUnitOfWork(session).savepoint():
            raise RuntimeError("constraint violated")
    assert session.log == ["savepoint", "rollback"]
