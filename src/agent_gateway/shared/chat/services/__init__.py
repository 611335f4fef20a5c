"""
목적: 대화 서비스 공개 API를 제공한다.
설명: ChatGatewayService를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/services/chat_service.py
"""

from agent_gateway.shared.chat.services.chat_service import ChatGatewayService

__all__ = ["ChatGatewayService"]
