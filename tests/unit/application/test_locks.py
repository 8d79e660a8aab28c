"""Tests for KeyedLock."""

import asyncio

import pytest

from helpdesk.application.locks import KeyedLock


@pytest.mark.asyncio
async def test_same_key_is_serialized():
    locks = KeyedLock()
    events: list[str] = []

    async def worker(name):
        async with locks.hold("chat-1"):
            events.append(f"{name}:in")
            await asyncio.sleep(0.01)
            events.append(f"{name}:out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events == ["a:in", "a:out", "b:in", "b:out"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_different_keys_run_concurrently():
    locks = KeyedLock()
    events: list[str] = []

    async def worker(key):
        async with locks.hold(key):
            events.append(f"{key}:in")
            await asyncio.sleep(0.01)
            events.append(f"{key}:out")

    await asyncio.gather(worker("chat-1"), worker("chat-2"))

    assert events[:2] == ["chat-1:in", "chat-2:in"]


@pytest.mark.asyncio
async def test_lock_released_on_error():
    locks = KeyedLock()
    with pytest.raises(ValueError):
        async with locks.hold("chat-1"):
            raise ValueError("boom")
    assert len(locks) == 0

    async with locks.hold("chat-1"):
        pass
