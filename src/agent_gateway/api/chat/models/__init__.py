"""
목적: 대화 API 모델 공개 API를 제공한다.
설명: HTTP 요청/응답과 WebSocket 프레임 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/api/chat/models/chat.py, src/agent_gateway/api/chat/models/socket.py
"""

from agent_gateway.api.chat.models.chat import ChatAnswer, ChatRequest
from agent_gateway.api.chat.models.socket import SocketChatAnswer, SocketChatRequest

__all__ = ["ChatAnswer", "ChatRequest", "SocketChatAnswer", "SocketChatRequest"]
