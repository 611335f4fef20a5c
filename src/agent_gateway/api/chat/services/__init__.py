"""
목적: 게이트웨이 API 서비스 공개 API를 제공한다.
설명: 런타임 싱글턴 접근 함수, 종료 함수, WebSocket 처리기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/api/chat/services/runtime.py, src/agent_gateway/api/chat/services/socket_handler.py
"""

from agent_gateway.api.chat.services.runtime import (
    get_agent_graph,
    get_chat_service,
    get_knowledge_initializer,
    get_settings,
    get_socket_handler,
    shutdown_chat_api_service,
)
from agent_gateway.api.chat.services.socket_handler import ChatSocketHandler

__all__ = [
    "ChatSocketHandler",
    "get_agent_graph",
    "get_chat_service",
    "get_knowledge_initializer",
    "get_settings",
    "get_socket_handler",
    "shutdown_chat_api_service",
]
