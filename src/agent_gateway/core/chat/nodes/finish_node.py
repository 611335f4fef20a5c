"""
목적: 실행 종료 노드를 제공한다.
설명: 모더레이션 거절이면 고정 거절 문구를, 아니면 마지막 assistant 메시지 본문을 assistant_message로 기록한다.
디자인 패턴: 함수형 노드
참조: src/agent_gateway/core/chat/graphs/agent_graph.py, src/agent_gateway/core/chat/const/messages/responses.py
"""

from __future__ import annotations

from typing import Any

from agent_gateway.core.chat.const import AgentResponseMessage
from agent_gateway.core.chat.models import ChatMessage, ChatRole, ModerationVerdict
from agent_gateway.shared.chat.nodes._state_adapter import coerce_state_mapping
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail


def run_finish(state: Any) -> dict[str, Any]:
    """최종 답변을 확정한다."""

    mapping = coerce_state_mapping(state)
    verdict = mapping.get("moderation")
    if isinstance(verdict, ModerationVerdict) and verdict.is_harmful:
        return {"assistant_message": AgentResponseMessage.MODERATION_ERROR.value}

    messages: list[ChatMessage] = list(mapping.get("messages") or [])
    for message in reversed(messages):
        if message.role == ChatRole.ASSISTANT:
            return {"assistant_message": message.content}

    detail = ExceptionDetail(code="AGENT_FINAL_MESSAGE_MISSING", cause=f"messages={len(messages)}")
    raise BaseAppException("최종 assistant 메시지를 찾을 수 없습니다.", detail)


__all__ = ["run_finish"]
