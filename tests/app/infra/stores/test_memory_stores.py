"""Testes do store de sessões de chat em memória."""

from __future__ import annotations

import pytest

from app.infra.stores.memory_stores import MemoryChatSessionStore
from tests.fakes.fake_clock import ManualClock


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def store(clock) -> MemoryChatSessionStore:
    return MemoryChatSessionStore(clock)


@pytest.mark.asyncio
async def test_save_and_load_session(store) -> None:
    await store.save("chat_1", {"session_id": "chat_1", "messages": [{"text": "olá"}]})
    loaded = await store.load("chat_1")
    assert loaded == {"session_id": "chat_1", "messages": [{"text": "olá"}]}


@pytest.mark.asyncio
async def test_load_returns_copy(store) -> None:
    await store.save("chat_1", {"messages": []})
    loaded = await store.load("chat_1")
    loaded["messages"].append("x")
    assert await store.load("chat_1") == {"messages": []}


@pytest.mark.asyncio
async def test_load_nonexistent_returns_none(store) -> None:
    assert await store.load("nonexistent") is None


@pytest.mark.asyncio
async def test_exists_and_delete(store) -> None:
    await store.save("chat_del", {})
    assert await store.exists("chat_del") is True
    assert await store.delete("chat_del") is True
    assert await store.exists("chat_del") is False
    assert await store.delete("chat_del") is False


@pytest.mark.asyncio
async def test_entries_expire_after_ttl(store, clock) -> None:
    await store.save("chat_short", {}, ttl_seconds=60)
    await store.save("chat_long", {}, ttl_seconds=600)

    clock.advance(61)

    assert await store.load("chat_short") is None
    assert await store.list_ids() == ["chat_long"]


@pytest.mark.asyncio
async def test_save_renews_ttl(store, clock) -> None:
    await store.save("chat_1", {"n": 1}, ttl_seconds=60)
    clock.advance(50)
    await store.save("chat_1", {"n": 2}, ttl_seconds=60)
    clock.advance(50)
    assert await store.load("chat_1") == {"n": 2}
