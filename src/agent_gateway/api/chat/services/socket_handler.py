"""
목적: WebSocket 대화 세션 처리기를 제공한다.
설명: 연결 1개에서 여러 요청을 동시에 처리한다. 인바운드 프레임마다 태스크를 만들고,
    응답 조각마다 chatRequestId를 그대로 붙여 보내며, 교환마다 completed=true 프레임 1개로 끝낸다.
디자인 패턴: 세션 핸들러
참조: src/agent_gateway/shared/chat/transport/connection_manager.py, src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

import asyncio
import json
from contextlib import aclosing

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from agent_gateway.api.chat.models import SocketChatAnswer, SocketChatRequest
from agent_gateway.api.const import SESSION_ID_HEADER
from agent_gateway.core.chat.const import AgentResponseMessage
from agent_gateway.shared.chat.services import ChatGatewayService
from agent_gateway.shared.chat.transport import ConnectionHandle, ConnectionManager
from agent_gateway.shared.exceptions import BaseAppException
from agent_gateway.shared.logging import Logger, create_default_logger


class ChatSocketHandler:
    """WebSocket 대화 처리기."""

    def __init__(
        self,
        service: ChatGatewayService,
        manager: ConnectionManager,
        logger: Logger | None = None,
    ) -> None:
        self._service = service
        self._manager = manager
        self._logger = logger or create_default_logger("ChatSocketHandler")

    @property
    def manager(self) -> ConnectionManager:
        return self._manager

    async def run(self, websocket: WebSocket) -> None:
        """연결 수명 동안 인바운드 프레임을 읽어 요청별 태스크로 분배한다."""

        session_id = self._service.resolve_session_id(websocket.headers.get(SESSION_ID_HEADER))
        await websocket.accept()
        handle = ConnectionHandle(websocket, session_id)
        await self._manager.register(handle)
        try:
            while True:
                raw = await websocket.receive_text()
                request = self._parse(raw)
                if request is None:
                    self._logger.warning(f"ws.frame.invalid: connection_id={handle.connection_id}")
                    await handle.send(
                        SocketChatAnswer(
                            message=AgentResponseMessage.SYSTEM_ERROR.value,
                            chat_session_id=handle.session_id,
                            chat_request_id=None,
                            completed=True,
                        ).to_frame()
                    )
                    continue
                requested_session = str(request.chat_session_id or "").strip()
                if requested_session and requested_session != handle.session_id:
                    await self._manager.migrate(handle, requested_session)
                handle.track(asyncio.create_task(self._exchange(handle, request, handle.session_id)))
        except WebSocketDisconnect as disconnect:
            self._logger.info(
                f"ws.disconnected: connection_id={handle.connection_id}, code={disconnect.code}"
            )
        except RuntimeError:
            # 서버 종료 시 연결 관리자가 먼저 소켓을 닫은 경우
            if not handle.closed:
                raise
        finally:
            await self._manager.unregister(handle)

    async def _exchange(self, handle: ConnectionHandle, request: SocketChatRequest, session_id: str) -> None:
        request_id = request.chat_request_id
        self._logger.info(
            f"ws.exchange.start: session_id={session_id}, request_id={request_id}, "
            f"in_flight={handle.in_flight}"
        )
        try:
            try:
                async with aclosing(self._service.stream(request.message, session_id)) as fragments:
                    async for fragment in fragments:
                        if fragment:
                            await handle.send(self._answer(fragment, session_id, request_id, completed=False))
            except BaseAppException as error:
                self._logger.warning(
                    f"ws.exchange.rejected: session_id={session_id}, request_id={request_id}, code={error.code}"
                )
                await handle.send(
                    self._answer(AgentResponseMessage.SYSTEM_ERROR.value, session_id, request_id, completed=False)
                )
            await handle.send(self._answer("", session_id, request_id, completed=True))
        except Exception as error:  # noqa: BLE001 - 끊긴 소켓 전송 오류 캡처
            self._logger.warning(
                f"ws.exchange.send_failed: session_id={session_id}, request_id={request_id}, error={error}"
            )
            return
        self._logger.info(f"ws.exchange.done: session_id={session_id}, request_id={request_id}")

    def _answer(
        self,
        message: str,
        session_id: str,
        request_id: str | None,
        completed: bool,
    ) -> dict[str, object]:
        return SocketChatAnswer(
            message=message,
            chat_session_id=session_id,
            chat_request_id=request_id,
            completed=completed,
        ).to_frame()

    def _parse(self, raw: str) -> SocketChatRequest | None:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            return None
        if not isinstance(payload, dict):
            return None
        try:
            return SocketChatRequest.model_validate(payload)
        except ValidationError:
            return None


__all__ = ["ChatSocketHandler"]
