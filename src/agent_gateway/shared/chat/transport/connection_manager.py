"""
목적: WebSocket 연결 레지스트리를 제공한다.
설명: 연결마다 현재 세션 ID, 송신 직렬화 락, 진행 중 요청 태스크를 보관하고,
    세션 ID 이전(migrate), 연결 해제 시 태스크 취소, 종료 시 1001 코드 일괄 종료를 담당한다.
디자인 패턴: 레지스트리 + 명시적 수명 관리 객체
참조: src/agent_gateway/api/chat/services/socket_handler.py, src/agent_gateway/api/main.py
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Protocol
from uuid import uuid4

from agent_gateway.shared.logging import Logger, create_default_logger

GOING_AWAY_CODE = 1001


class SocketPort(Protocol):
    """연결 관리자가 사용하는 소켓 최소 인터페이스. FastAPI WebSocket이 그대로 만족한다."""

    async def send_json(self, data: Any, mode: str = "text") -> None:
        """JSON 프레임을 전송한다."""

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        """연결을 닫는다."""


class ConnectionHandle:
    """
    연결 1개의 상태.

    Args:
        socket: 전송 대상 소켓.
        session_id: 현재 세션 ID.
        connection_id: 연결 식별자. 없으면 새로 만든다.
    """

    def __init__(self, socket: SocketPort, session_id: str, connection_id: str | None = None) -> None:
        self._socket = socket
        self._session_id = session_id
        self._connection_id = connection_id or uuid4().hex
        self._send_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def connection_id(self) -> str:
        return self._connection_id

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def send(self, frame: Mapping[str, Any]) -> None:
        """프레임을 전송한다. 여러 요청 태스크의 프레임이 섞이지 않도록 전송을 직렬화한다."""

        async with self._send_lock:
            await self._socket.send_json(dict(frame))

    def track(self, task: asyncio.Task[Any]) -> None:
        """요청 처리 태스크를 등록한다. 완료되면 자동으로 빠진다."""

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def cancel_tasks(self) -> None:
        """진행 중 요청 태스크를 모두 취소하고 종료를 기다린다."""

        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def close(self, code: int = GOING_AWAY_CODE, reason: str | None = None) -> None:
        if self._closed:
            return
        self._closed = True
        await self._socket.close(code=code, reason=reason)

    def _set_session_id(self, session_id: str) -> None:
        self._session_id = session_id


class ConnectionManager:
    """세션 ID 기준 연결 레지스트리."""

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or create_default_logger("ConnectionManager")
        self._connections: dict[str, ConnectionHandle] = {}
        self._lock = asyncio.Lock()

    @property
    def active_count(self) -> int:
        return len(self._connections)

    def get(self, session_id: str) -> ConnectionHandle | None:
        return self._connections.get(session_id)

    async def register(self, handle: ConnectionHandle) -> None:
        """연결을 등록한다. 같은 세션 ID의 기존 연결은 새 연결로 교체된다."""

        async with self._lock:
            previous = self._connections.get(handle.session_id)
            self._connections[handle.session_id] = handle
        if previous is not None and previous is not handle:
            self._logger.warning(
                f"ws.register.replaced: session_id={handle.session_id}, "
                f"previous={previous.connection_id}, current={handle.connection_id}"
            )
        self._logger.info(
            f"ws.registered: session_id={handle.session_id}, connection_id={handle.connection_id}, "
            f"active={self.active_count}"
        )

    async def migrate(self, handle: ConnectionHandle, new_session_id: str) -> None:
        """연결의 세션 ID를 바꾼다. 기존 매핑은 제거하고 새 매핑을 추가한다. 진행 중 태스크는 유지된다."""

        old_session_id = handle.session_id
        if new_session_id == old_session_id:
            return
        async with self._lock:
            if self._connections.get(old_session_id) is handle:
                del self._connections[old_session_id]
            handle._set_session_id(new_session_id)
            self._connections[new_session_id] = handle
        self._logger.info(
            f"ws.migrated: connection_id={handle.connection_id}, from={old_session_id}, to={new_session_id}"
        )

    async def unregister(self, handle: ConnectionHandle) -> None:
        """연결을 해제한다. 진행 중 요청 태스크는 모두 취소된다."""

        async with self._lock:
            if self._connections.get(handle.session_id) is handle:
                del self._connections[handle.session_id]
        await handle.cancel_tasks()
        self._logger.info(
            f"ws.unregistered: session_id={handle.session_id}, connection_id={handle.connection_id}, "
            f"active={self.active_count}"
        )

    async def shutdown(self) -> None:
        """모든 연결의 태스크를 취소하고 1001(going away)로 닫는다."""

        async with self._lock:
            handles = list(self._connections.values())
            self._connections.clear()
        for handle in handles:
            await handle.cancel_tasks()
            try:
                await handle.close(code=GOING_AWAY_CODE, reason="server shutdown")
            except Exception as error:  # noqa: BLE001 - 이미 끊긴 소켓 오류 캡처
                self._logger.warning(
                    f"ws.shutdown.close_failed: connection_id={handle.connection_id}, error={error}"
                )
        self._logger.info(f"ws.shutdown: closed={len(handles)}")


__all__ = ["ConnectionHandle", "ConnectionManager", "GOING_AWAY_CODE", "SocketPort"]
