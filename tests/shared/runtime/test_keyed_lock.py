"""
목적: 키별 비동기 락을 검증한다.
설명: 같은 키는 직렬화되고 다른 키는 동시에 진행되며, 사용이 끝난 키는 정리되는지 테스트한다.
디자인 패턴: 동시성 단위 테스트
참조: src/agent_gateway/shared/runtime/keyed_lock.py
"""

from __future__ import annotations

import asyncio

import pytest

from agent_gateway.shared.runtime import KeyedAsyncLock


@pytest.mark.asyncio
async def test_keyed_lock_serializes_same_key() -> None:
    """같은 키의 구간은 겹치지 않아야 한다."""

    locks = KeyedAsyncLock()
    trail: list[str] = []

    async def worker(name: str) -> None:
        async with locks.acquire("s-1"):
            trail.append(f"{name}:in")
            await asyncio.sleep(0.01)
            trail.append(f"{name}:out")

    await asyncio.gather(worker("a"), worker("b"))

    assert trail == ["a:in", "a:out", "b:in", "b:out"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_keyed_lock_allows_different_keys_concurrently() -> None:
    """다른 키는 서로를 기다리지 않아야 한다."""

    locks = KeyedAsyncLock()
    entered = asyncio.Event()

    async def first() -> None:
        async with locks.acquire("s-1"):
            await asyncio.wait_for(entered.wait(), timeout=1.0)

    async def second() -> None:
        async with locks.acquire("s-2"):
            assert locks.is_locked("s-1")
            entered.set()

    await asyncio.gather(first(), second())

    assert not locks.is_locked("s-1")
