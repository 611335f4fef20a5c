"""
목적: 에이전트 실행(AgentRun) LangGraph 상태 타입을 정의한다.
설명: 입력 메시지 1건에 대한 그래프 실행 동안 노드 사이로 전달되는 상태 구조를 제공한다.
디자인 패턴: 상태 객체(State Object)
참조: src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

import operator

from typing_extensions import Annotated, NotRequired, TypedDict

from agent_gateway.core.chat.models import ChatMessage, ModerationVerdict, ToolCall


class AgentRunState(TypedDict):
    """LangGraph 에이전트 실행 상태 타입."""

    session_id: str
    user_text: str
    system_prompt: str
    history: list[ChatMessage]
    # 이번 턴에서 생성된 메시지. 첫 항목은 프롬프트가 조립된 사용자 메시지다.
    messages: Annotated[list[ChatMessage], operator.add]
    stream_tokens: bool
    cursor: str
    moderation: NotRequired[ModerationVerdict]
    pending_tool_calls: NotRequired[list[ToolCall]]
    iterations: NotRequired[int]
    assistant_message: str
