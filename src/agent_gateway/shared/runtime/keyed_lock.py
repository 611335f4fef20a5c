"""
목적: 키 단위 비동기 상호 배제를 제공한다.
설명: 세션 ID별로 asyncio.Lock을 공유하고, 대기자가 없어지면 항목을 제거해 맵이 무한히 커지지 않게 한다.
디자인 패턴: 레지스트리
참조: src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class _LockEntry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.holders = 0


class KeyedAsyncLock:
    """키별 asyncio.Lock 레지스트리."""

    def __init__(self) -> None:
        self._entries: dict[str, _LockEntry] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """키에 대한 락을 획득한 컨텍스트를 제공한다."""

        entry = self._entries.get(key)
        if entry is None:
            entry = _LockEntry()
            self._entries[key] = entry
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                self._entries.pop(key, None)

    def is_locked(self, key: str) -> bool:
        entry = self._entries.get(key)
        return bool(entry and entry.lock.locked())

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["KeyedAsyncLock"]
