"""
목적: 고정 응답 문구 공개 API를 제공한다.
설명: 응답 열거형과 인사말 목록을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/const/messages/responses.py
"""

from agent_gateway.core.chat.const.messages.responses import GREETINGS, AgentResponseMessage

__all__ = ["AgentResponseMessage", "GREETINGS"]
