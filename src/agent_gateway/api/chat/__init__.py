"""
목적: 게이트웨이 API 모듈 공개 API를 제공한다.
설명: HTTP/WebSocket 라우터와 서비스 종료 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/api/chat/routers/router.py, src/agent_gateway/api/chat/services/runtime.py
"""

from agent_gateway.api.chat.routers import router, socket_router
from agent_gateway.api.chat.services import shutdown_chat_api_service

__all__ = ["router", "socket_router", "shutdown_chat_api_service"]
