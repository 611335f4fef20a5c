"""
목적: WebSocket 대화 라우터를 제공한다.
설명: /ws/chat 연결을 ChatSocketHandler에 넘긴다.
디자인 패턴: 라우터 패턴
참조: src/agent_gateway/api/chat/services/socket_handler.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, WebSocket

from agent_gateway.api.chat.services import ChatSocketHandler, get_socket_handler
from agent_gateway.api.const import WS_CHAT_PATH

router = APIRouter()


@router.websocket(WS_CHAT_PATH)
async def chat_socket(
    websocket: WebSocket,
    handler: ChatSocketHandler = Depends(get_socket_handler),
) -> None:
    """연결 1개를 처리한다."""

    await handler.run(websocket)
