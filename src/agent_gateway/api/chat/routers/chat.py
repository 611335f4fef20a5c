"""
목적: 블로킹 대화 라우터를 제공한다.
설명: 메시지 1건을 끝까지 처리해 최종 응답과 세션 ID를 본문/헤더로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, Response

from agent_gateway.api.chat.models import ChatAnswer, ChatRequest
from agent_gateway.api.chat.routers.common import run_until_disconnected, to_http_exception
from agent_gateway.api.chat.services import get_chat_service
from agent_gateway.api.const import CHAT_PATH, CLIENT_CLOSED_REQUEST, SESSION_ID_HEADER
from agent_gateway.shared.chat.services import ChatGatewayService
from agent_gateway.shared.exceptions import BaseAppException
from agent_gateway.shared.logging import create_default_logger

router = APIRouter()
logger = create_default_logger("ChatRouter")


@router.post(CHAT_PATH, response_model=ChatAnswer, summary="메시지 1건을 처리합니다.")
async def chat(
    request: ChatRequest,
    http_request: Request,
    response: Response,
    header_session_id: str | None = Header(default=None, alias=SESSION_ID_HEADER),
    service: ChatGatewayService = Depends(get_chat_service),
) -> ChatAnswer | Response:
    """본문의 sessionId가 헤더보다 우선한다. 클라이언트 연결이 끊기면 진행 중 실행을 취소한다."""

    session_id = request.session_id or header_session_id
    try:
        completed, reply = await run_until_disconnected(
            http_request,
            service.handle(request.message, session_id),
        )
    except BaseAppException as error:
        raise to_http_exception(error) from error
    if not completed or reply is None:
        logger.warning(f"chat.http.disconnected: session_id={session_id}")
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    response.headers[SESSION_ID_HEADER] = reply.session_id
    return ChatAnswer(message=reply.message, session_id=reply.session_id)
