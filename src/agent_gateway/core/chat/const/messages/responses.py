"""
목적: 사용자에게 노출되는 고정 응답 문구를 정의한다.
설명: 시스템 오류/모더레이션 거절 문구와 인사말 후보를 제공한다.
디자인 패턴: 상수 열거형
참조: src/agent_gateway/core/chat/nodes/finish_node.py, src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

from enum import Enum


class AgentResponseMessage(str, Enum):
    """에이전트 고정 응답 문구."""

    SYSTEM_ERROR = "Alas, I cannot help thee now, mellon."
    MODERATION_ERROR = "Forgive me, mellon, but your message defies our sacred guidelines."


GREETINGS: tuple[str, ...] = (
    "Ah, well met! Shall I guide your steps through the realms of light?",
    "Greetings, friend of the woods. May I show you the hidden wonders?",
    "Hail! Shall the stars themselves illuminate your path today?",
    "Ah, a bright hello to you, traveler! How may I illuminate your path through elven wonders today?",
)
