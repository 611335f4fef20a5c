"""
목적: 대화 라우터 공통 유틸을 제공한다.
설명: 전송 계층 도메인 예외를 HTTP 예외로 변환하고, 클라이언트 연결이 끊기면 진행 중 실행을 취소하는 헬퍼를 제공한다.
디자인 패턴: 유틸리티 모듈
참조: src/agent_gateway/api/chat/routers/router.py, src/agent_gateway/api/chat/routers/chat.py
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from contextlib import suppress
from typing import Any, Protocol, TypeVar

from fastapi import HTTPException, status

from agent_gateway.api.const import DISCONNECT_POLL_SECONDS
from agent_gateway.shared.exceptions import BaseAppException

T = TypeVar("T")


class DisconnectSource(Protocol):
    """연결 종료 여부를 확인할 수 있는 요청 객체. FastAPI Request가 그대로 만족한다."""

    async def is_disconnected(self) -> bool:
        """클라이언트 연결이 끊겼는지 반환한다."""


def to_http_exception(error: BaseAppException) -> HTTPException:
    """도메인 예외를 HTTP 예외로 변환한다."""

    code = error.detail.code
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if code in {"CHAT_MESSAGE_EMPTY"}:
        status_code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=status_code, detail=error.to_dict())


async def run_until_disconnected(
    request: DisconnectSource,
    work: Coroutine[Any, Any, T],
    poll_interval: float = DISCONNECT_POLL_SECONDS,
) -> tuple[bool, T | None]:
    """
    작업을 실행하면서 클라이언트 연결을 감시한다.

    연결이 먼저 끊기면 작업 태스크를 취소하고 종료를 기다린 뒤 (False, None)을 반환한다.
    작업이 먼저 끝나면 (True, 결과)를 반환하고, 작업 예외는 그대로 전파한다.
    """

    task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(_wait_disconnect(request, poll_interval))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        watcher.cancel()
        with suppress(asyncio.CancelledError):
            await watcher

    if task.done():
        return True, task.result()
    task.cancel()
    with suppress(asyncio.CancelledError):
        await task
    return False, None


async def _wait_disconnect(request: DisconnectSource, poll_interval: float) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(poll_interval)
