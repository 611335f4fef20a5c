"""
목적: Chat 도메인 모델 공개 API를 제공한다.
설명: 엔티티와 시간/ID 유틸을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/models/entities.py
"""

from agent_gateway.core.chat.models.entities import (
    Attachment,
    ChatMessage,
    ChatReply,
    ChatRole,
    ModerationVerdict,
    RetrievedDocument,
    SessionCheckpoint,
    ToolCall,
    ToolResult,
    new_session_id,
    utc_now,
)

__all__ = [
    "Attachment",
    "ChatMessage",
    "ChatReply",
    "ChatRole",
    "ModerationVerdict",
    "RetrievedDocument",
    "SessionCheckpoint",
    "ToolCall",
    "ToolResult",
    "new_session_id",
    "utc_now",
]
